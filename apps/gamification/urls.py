from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'gamification'

router = DefaultRouter()
router.register(r'achievements', views.AchievementViewSet, basename='achievement')

urlpatterns = [
    path('students/<uuid:student_id>/points/', views.student_points, name='student-points'),
    path('students/<uuid:student_id>/award/', views.award_student_points, name='award-points'),
    path('schools/<uuid:school_id>/leaderboard/', views.school_leaderboard, name='leaderboard'),

    path('', include(router.urls)),
]

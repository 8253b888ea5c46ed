from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'attendance'

router = DefaultRouter()
router.register(r'', views.AttendanceViewSet, basename='attendance')

urlpatterns = [
    path('generate-token/', views.generate_token, name='generate-token'),
    path('check-in/', views.check_in, name='check-in'),
    path('mark/', views.mark_attendance, name='mark'),
    path('schools/<uuid:school_id>/weekly/', views.weekly_summary, name='weekly-summary'),

    path('', include(router.urls)),
]

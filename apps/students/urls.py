from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'students'

# Note: named prefixes must be registered BEFORE the empty prefix
router = DefaultRouter()
router.register(r'classes', views.DanceClassViewSet, basename='class')
router.register(r'enrollments', views.EnrollmentViewSet, basename='enrollment')
router.register(r'', views.StudentViewSet, basename='student')

urlpatterns = [
    # GET    /api/students/                         - List students (?school, unit, active, search)
    # POST   /api/students/                         - Create student (admin, plan limit)
    # GET    /api/students/{id}/enrollments/        - Student's classes
    # GET    /api/students/{id}/guardians/          - Linked guardians
    # POST   /api/students/{id}/guardians/          - Link guardian (admin)
    # GET    /api/students/{id}/guardian-invites/   - Invites sent for the student
    # POST   /api/students/{id}/guardian-invites/   - E-mail a guardian invite (admin)
    # POST   /api/students/guardian-invites/accept/ - Redeem an invite token
    # GET    /api/students/classes/                 - List classes
    # GET    /api/students/classes/{id}/students/   - Class roster
    # GET    /api/students/classes/{id}/schedules/  - Weekly slots
    # POST   /api/students/classes/{id}/schedules/  - Add slot (admin)
    # POST   /api/students/enrollments/             - Enroll student (admin)

    path('guardian-invites/accept/', views.accept_guardian_invite_view, name='accept-guardian-invite'),
    path('', include(router.urls)),
]

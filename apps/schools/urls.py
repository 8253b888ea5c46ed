from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'schools'

# Note: named prefixes must be registered BEFORE the empty prefix
router = DefaultRouter()
router.register(r'leads', views.LeadViewSet, basename='lead')
router.register(r'', views.SchoolViewSet, basename='school')

urlpatterns = [
    # School ViewSet routes
    # GET    /api/schools/                          - List user's schools
    # POST   /api/schools/                          - Create school
    # GET    /api/schools/{id}/                     - School profile
    # PATCH  /api/schools/{id}/                     - Update profile (admin)
    # DELETE /api/schools/{id}/                     - Delete school (owner)
    # GET    /api/schools/{id}/members/             - List members
    # POST   /api/schools/{id}/update_member_role/  - Change role (admin)
    # GET    /api/schools/{id}/units/               - List units
    # POST   /api/schools/{id}/units/               - Create unit (admin)
    # GET    /api/schools/{id}/subscription/        - Plan usage
    # POST   /api/schools/leads/                    - Landing page contact form (public)
    # GET    /api/schools/leads/                    - Lead board (platform staff, ?status)
    # PATCH  /api/schools/leads/{id}/               - Move lead / edit notes (platform staff)
    # POST   /api/schools/leads/{id}/welcome-email/ - Resend welcome e-mail (platform staff)

    path('plans/', views.list_plans, name='plans'),

    path('', include(router.urls)),
]

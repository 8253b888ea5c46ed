from django.urls import path
from . import views

app_name = 'insights'

urlpatterns = [
    path('billing-messages/', views.billing_messages, name='billing-messages'),
    path('schools/<uuid:school_id>/churn-risk/', views.churn_risk, name='churn-risk'),
    path('schools/<uuid:school_id>/attendance-analysis/', views.attendance_analysis, name='attendance-analysis'),
    path('schools/<uuid:school_id>/export/', views.export, name='export'),
    path('schools/<uuid:school_id>/dashboard/', views.dashboard, name='dashboard'),
]

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'payments'

router = DefaultRouter()
router.register(r'commissions', views.CommissionViewSet, basename='commission')
router.register(r'', views.PaymentViewSet, basename='payment')

urlpatterns = [
    path('asaas/charge/', views.create_charge, name='asaas-charge'),
    path('asaas/webhook/', views.asaas_webhook, name='asaas-webhook'),
    path('students/<uuid:student_id>/outstanding/', views.student_outstanding, name='student-outstanding'),

    path('', include(router.urls)),
]

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'events'

router = DefaultRouter()
router.register(r'', views.EventViewSet, basename='event')

urlpatterns = [
    path('tickets/scan/', views.scan_ticket_view, name='scan-ticket'),
    path('tickets/<uuid:ticket_id>/pay/', views.pay_ticket, name='pay-ticket'),
    path('tickets/<uuid:ticket_id>/generate/', views.generate_ticket_view, name='generate-ticket'),

    path('', include(router.urls)),
]

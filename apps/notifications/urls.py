from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'notifications'

router = DefaultRouter()
router.register(r'whatsapp/messages', views.WhatsAppMessageViewSet, basename='whatsapp-message')
router.register(r'', views.NotificationLogViewSet, basename='notification')

urlpatterns = [
    path('whatsapp/send/', views.send_whatsapp, name='send-whatsapp'),
    path('send/', views.send_notification_view, name='send-notification'),

    path('', include(router.urls)),
]

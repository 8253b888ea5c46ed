from django.contrib import admin
from .models import NotificationLog, WhatsAppMessage


@admin.register(NotificationLog)
class NotificationLogAdmin(admin.ModelAdmin):
    list_display = ['notification_type', 'user', 'student', 'status', 'sent_at']
    list_filter = ['notification_type', 'status']
    search_fields = ['message', 'user__email']


@admin.register(WhatsAppMessage)
class WhatsAppMessageAdmin(admin.ModelAdmin):
    list_display = ['phone', 'type', 'status', 'created_at', 'sent_at']
    list_filter = ['type', 'status']
    search_fields = ['phone', 'student__full_name']

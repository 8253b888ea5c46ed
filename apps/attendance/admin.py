from django.contrib import admin
from .models import QRToken, Attendance


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ['student', 'dance_class', 'attendance_date', 'marked_at']
    list_filter = ['attendance_date', 'dance_class__school']
    search_fields = ['student__full_name', 'dance_class__name']
    date_hierarchy = 'attendance_date'
    raw_id_fields = ['student', 'dance_class', 'marked_by']


@admin.register(QRToken)
class QRTokenAdmin(admin.ModelAdmin):
    list_display = ['token', 'dance_class', 'valid_from', 'valid_until']
    readonly_fields = ['token', 'created_at']

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for accounts.

    Staff, guardians and students share one login model; school roles
    live on SchoolMembership and are edited from the schools admin.
    """

    list_display = [
        'email',
        'display_name',
        'phone',
        'is_active_badge',
        'notifications_enabled',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'is_superuser',
        'notifications_enabled',
        'created_at',
    ]

    search_fields = ['email', 'display_name', 'phone']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'phone', 'password')
        }),
        ('Notification Preferences', {
            'fields': ('notifications_enabled', 'email_on_absence', 'email_on_late_payment'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = ['groups', 'user_permissions']

    def is_active_badge(self, obj):
        """Display active status as colored badge."""
        color, label = ('#22c55e', 'Active') if obj.is_active else ('#B85C5C', 'Inactive')
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color,
            label,
        )
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'

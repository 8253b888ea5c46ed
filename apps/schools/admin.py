from django.contrib import admin
from .models import School, SchoolMembership, Unit, Plan, Subscription, Lead


class SchoolMembershipInline(admin.TabularInline):
    model = SchoolMembership
    extra = 0
    raw_id_fields = ['user']


class UnitInline(admin.TabularInline):
    model = Unit
    extra = 0


@admin.register(School)
class SchoolAdmin(admin.ModelAdmin):
    list_display = ['name', 'city', 'admin', 'contact_email', 'created_at']
    search_fields = ['name', 'city', 'admin__email']
    raw_id_fields = ['admin']
    inlines = [SchoolMembershipInline, UnitInline]


@admin.register(Plan)
class PlanAdmin(admin.ModelAdmin):
    list_display = ['name', 'monthly_price', 'student_limit', 'active']
    list_filter = ['active']


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ['school', 'plan', 'status', 'renew_at']
    list_filter = ['status', 'plan']
    search_fields = ['school__name']


@admin.register(Lead)
class LeadAdmin(admin.ModelAdmin):
    list_display = ['school_name', 'city', 'email', 'whatsapp', 'status', 'source', 'created_at']
    list_filter = ['status', 'source']
    search_fields = ['school_name', 'city', 'email']

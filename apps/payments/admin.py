from django.contrib import admin
from .models import Payment, AsaasCustomer, Commission


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['student', 'amount', 'due_date', 'status', 'payment_method', 'paid_date']
    list_filter = ['status', 'payment_method', 'reference_month']
    search_fields = ['student__full_name', 'payment_reference']
    date_hierarchy = 'due_date'
    raw_id_fields = ['student']


@admin.register(Commission)
class CommissionAdmin(admin.ModelAdmin):
    list_display = ['teacher', 'school', 'amount', 'reference_month', 'status']
    list_filter = ['status', 'school']


@admin.register(AsaasCustomer)
class AsaasCustomerAdmin(admin.ModelAdmin):
    list_display = ['student', 'asaas_customer_id', 'created_at']
    search_fields = ['asaas_customer_id', 'student__full_name']

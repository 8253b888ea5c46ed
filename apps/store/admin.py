from django.contrib import admin
from .models import Product, Order, OrderItem


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'school', 'price', 'stock', 'active']
    list_filter = ['active', 'school']
    search_fields = ['name']


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ['product', 'quantity', 'unit_price']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['id', 'buyer_name', 'school', 'total', 'status', 'created_at']
    list_filter = ['status', 'school']
    inlines = [OrderItemInline]

from django.contrib import admin
from .models import Event, Ticket


class TicketInline(admin.TabularInline):
    model = Ticket
    extra = 0
    fields = ['buyer_name', 'student', 'amount', 'status']


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ['title', 'school', 'event_date', 'ticket_price']
    list_filter = ['school']
    search_fields = ['title']
    inlines = [TicketInline]


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    list_display = ['buyer_name', 'event', 'amount', 'status', 'used_at']
    list_filter = ['status']
    search_fields = ['buyer_name', 'event__title']

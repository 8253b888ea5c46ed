from decimal import Decimal

from rest_framework import serializers

from .services import REPORT_TYPES


class BillingMessagesRequestSerializer(serializers.Serializer):
    studentName = serializers.CharField(max_length=200)
    debtAmount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    dueDate = serializers.DateField()


class BillingMessagesSerializer(serializers.Serializer):
    formal = serializers.CharField()
    friendly = serializers.CharField()
    urgent = serializers.CharField()


class ExportQuerySerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=REPORT_TYPES)


class DashboardStatsSerializer(serializers.Serializer):
    total_students = serializers.IntegerField()
    active_classes = serializers.IntegerField()
    monthly_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    pending_payments = serializers.IntegerField()
    pending_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    attendance_this_week = serializers.IntegerField()

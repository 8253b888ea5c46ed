from decimal import Decimal

from rest_framework import serializers
from django.utils import timezone
from apps.schools.mixins import SchoolFilterSerializer
from apps.schools.models import School
from apps.students.models import Student
from apps.accounts.models import User
from .models import Payment, PaymentStatus, PaymentMethod, Commission, CommissionStatus

REFERENCE_MONTH_REGEX = r'^\d{4}-(0[1-9]|1[0-2])$'


# =============================================================================
# Input Serializers
# =============================================================================

class PaymentFilterSerializer(SchoolFilterSerializer):
    """
    Query Parameters:
        school (UUID): Filter by school
        student (UUID): Filter by student
        status (str): pending, paid, overdue or cancelled
        reference_month (str): YYYY-MM
        due_from (date): Due on or after
        due_to (date): Due on or before
    """

    student = serializers.UUIDField(required=False)
    status = serializers.ChoiceField(choices=PaymentStatus.choices, required=False)
    reference_month = serializers.RegexField(REFERENCE_MONTH_REGEX, required=False)
    due_from = serializers.DateField(required=False)
    due_to = serializers.DateField(required=False)


class CommissionFilterSerializer(SchoolFilterSerializer):
    teacher = serializers.UUIDField(required=False)
    status = serializers.ChoiceField(choices=CommissionStatus.choices, required=False)
    reference_month = serializers.RegexField(REFERENCE_MONTH_REGEX, required=False)


class CreateChargeSerializer(serializers.Serializer):
    student_id = serializers.PrimaryKeyRelatedField(queryset=Student.objects.all(), source='student')
    cpf_cnpj = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    value = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('1.00'))
    billing_type = serializers.ChoiceField(choices=['BOLETO', 'PIX', 'CREDIT_CARD'], default='PIX')
    due_date = serializers.DateField(required=False)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')

    def validate_due_date(self, value):
        if value < timezone.localdate():
            raise serializers.ValidationError('Due date cannot be in the past')
        return value


class MarkPaidSerializer(serializers.Serializer):
    paid_date = serializers.DateField(required=False)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False)


# =============================================================================
# Model Serializers
# =============================================================================

class PaymentSerializer(serializers.ModelSerializer):
    student = serializers.PrimaryKeyRelatedField(queryset=Student.objects.all())
    student_name = serializers.CharField(source='student.full_name', read_only=True)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    reference_month = serializers.RegexField(REFERENCE_MONTH_REGEX, required=False, allow_blank=True)

    class Meta:
        model = Payment
        fields = [
            'id',
            'student',
            'student_name',
            'amount',
            'due_date',
            'paid_date',
            'status',
            'payment_method',
            'reference_month',
            'payment_reference',
            'boleto_url',
            'pix_code',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'payment_reference', 'boleto_url', 'pix_code', 'created_at', 'updated_at']

    def validate_student(self, value):
        if self.instance is not None and value.id != self.instance.student_id:
            raise serializers.ValidationError('Student of a payment cannot be changed')
        return value


class CommissionSerializer(serializers.ModelSerializer):
    school = serializers.PrimaryKeyRelatedField(queryset=School.objects.all())
    teacher = serializers.PrimaryKeyRelatedField(queryset=User.objects.all())
    teacher_name = serializers.CharField(source='teacher.get_display_name', read_only=True)
    reference_month = serializers.RegexField(REFERENCE_MONTH_REGEX)

    class Meta:
        model = Commission
        fields = [
            'id',
            'school',
            'teacher',
            'teacher_name',
            'amount',
            'reference_month',
            'description',
            'status',
            'payment_date',
            'created_at',
        ]
        read_only_fields = ['id', 'status', 'payment_date', 'created_at']

    def validate(self, attrs):
        school = attrs.get('school') or getattr(self.instance, 'school', None)
        teacher = attrs.get('teacher')
        if teacher is not None and not school.is_staff_member(teacher):
            raise serializers.ValidationError({'teacher': 'Professor não pertence a esta escola'})
        return attrs


class OutstandingSerializer(serializers.Serializer):
    student_id = serializers.UUIDField()
    total_outstanding = serializers.DecimalField(max_digits=12, decimal_places=2)
    payments = PaymentSerializer(many=True)


class WebhookResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    paymentId = serializers.UUIDField()
    newStatus = serializers.CharField()

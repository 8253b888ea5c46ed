from django.db import models
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid


class PaymentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PAID = 'paid', 'Paid'
    OVERDUE = 'overdue', 'Overdue'
    CANCELLED = 'cancelled', 'Cancelled'


class PaymentMethod(models.TextChoices):
    BOLETO = 'boleto', 'Boleto'
    PIX = 'pix', 'PIX'
    CREDIT_CARD = 'credit_card', 'Credit card'


class Payment(models.Model):
    """Monthly fee or one-off charge owed by a student."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.ForeignKey(
        'students.Student',
        on_delete=models.CASCADE,
        related_name='payments'
    )

    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    due_date = models.DateField(db_index=True)
    paid_date = models.DateField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING
    )
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        blank=True
    )
    reference_month = models.CharField(max_length=7, blank=True, help_text='YYYY-MM')

    # Gateway references
    payment_reference = models.CharField(max_length=100, blank=True, db_index=True)
    boleto_url = models.URLField(max_length=500, blank=True)
    pix_code = models.TextField(blank=True)

    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'
        indexes = [
            models.Index(fields=['student', 'status']),
            models.Index(fields=['status', 'due_date']),
        ]
        ordering = ['-due_date']

    def __str__(self):
        return f"{self.student.full_name}: R$ {self.amount} due {self.due_date}"

    def is_late(self, today=None):
        """Pending past due date, or paid after it."""
        today = today or timezone.localdate()
        if self.status == PaymentStatus.PAID:
            return self.paid_date is not None and self.paid_date > self.due_date
        return self.status in (PaymentStatus.PENDING, PaymentStatus.OVERDUE) and self.due_date < today


class AsaasCustomer(models.Model):
    """Link between a student and its customer record in Asaas."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student = models.OneToOneField(
        'students.Student',
        on_delete=models.CASCADE,
        related_name='asaas_customer'
    )
    asaas_customer_id = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'asaas_customers'

    def __str__(self):
        return self.asaas_customer_id


class CommissionStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PAID = 'paid', 'Paid'


class Commission(models.Model):
    """Amount owed by a school to one of its teachers."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    school = models.ForeignKey(
        'schools.School',
        on_delete=models.CASCADE,
        related_name='commissions'
    )
    teacher = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='commissions'
    )
    amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    reference_month = models.CharField(max_length=7, help_text='YYYY-MM')
    description = models.CharField(max_length=255, blank=True)
    status = models.CharField(
        max_length=20,
        choices=CommissionStatus.choices,
        default=CommissionStatus.PENDING
    )
    payment_date = models.DateField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'commissions'
        indexes = [
            models.Index(fields=['school', 'reference_month']),
        ]
        ordering = ['-reference_month', 'teacher__display_name']

    def __str__(self):
        return f"{self.teacher} {self.reference_month}: R$ {self.amount}"

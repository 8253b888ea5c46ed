from django.db import models
from django.utils import timezone
import uuid


class NotificationType(models.TextChoices):
    REPEATED_ABSENCE = 'repeated_absence', 'Repeated absence'
    LATE_PAYMENT = 'late_payment', 'Late payment'
    ABSENCE = 'absence', 'Absence'
    GENERAL = 'general', 'General'


class NotificationStatus(models.TextChoices):
    SENT = 'sent', 'Sent'
    FAILED = 'failed', 'Failed'


class NotificationLog(models.Model):
    """Alert delivered to a school admin, or an e-mail sent to a lead."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notifications'
    )
    recipient_email = models.EmailField(max_length=255, blank=True)
    student = models.ForeignKey(
        'students.Student',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notifications'
    )
    notification_type = models.CharField(max_length=30, choices=NotificationType.choices)
    message = models.TextField()
    sent_at = models.DateTimeField(default=timezone.now, db_index=True)
    status = models.CharField(
        max_length=10,
        choices=NotificationStatus.choices,
        default=NotificationStatus.SENT
    )

    class Meta:
        db_table = 'notifications_log'
        indexes = [
            models.Index(fields=['user', 'student', 'notification_type', 'sent_at']),
        ]
        ordering = ['-sent_at']

    def __str__(self):
        return f"{self.notification_type} -> {self.user or self.recipient_email}"


class WhatsAppMessageType(models.TextChoices):
    CLASS_REMINDER = 'class_reminder', 'Class reminder'
    PAYMENT_REMINDER = 'payment_reminder', 'Payment reminder'
    GENERAL = 'general', 'General'


class WhatsAppMessageStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    SENT = 'sent', 'Sent'
    FAILED = 'failed', 'Failed'


class WhatsAppMessage(models.Model):
    """Outgoing WhatsApp message queue."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    phone = models.CharField(max_length=20)
    message = models.TextField()
    student = models.ForeignKey(
        'students.Student',
        on_delete=models.CASCADE,
        related_name='whatsapp_messages'
    )
    type = models.CharField(max_length=20, choices=WhatsAppMessageType.choices)
    status = models.CharField(
        max_length=10,
        choices=WhatsAppMessageStatus.choices,
        default=WhatsAppMessageStatus.PENDING
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'whatsapp_messages'
        indexes = [
            models.Index(fields=['student', 'created_at']),
            models.Index(fields=['status']),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.type} to {self.phone} ({self.status})"

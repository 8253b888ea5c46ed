"""
Notification Services Module
============================

Alerts for school admins and the WhatsApp message queue.

Functions:
    check_notification_triggers: Daily scan for absences and late payments.
    send_class_reminders: Queue reminders for classes starting in one hour.
    queue_whatsapp_message: Admin-initiated WhatsApp message.
    send_notification: Log (and e-mail) an alert to the calling admin.

The two scans are run from cron through the management commands of the
same name.
"""

import logging
from datetime import datetime, time, timedelta

from django.conf import settings
from django.core.mail import send_mail
from django.db.models import Q
from django.utils import timezone

from apps.schools.models import School
from apps.students.models import Student, ClassSchedule, Enrollment, EnrollmentStatus
from apps.attendance.models import Attendance
from apps.payments.models import Payment, PaymentStatus
from .models import (
    NotificationLog,
    NotificationType,
    NotificationStatus,
    WhatsAppMessage,
    WhatsAppMessageType,
    WhatsAppMessageStatus,
)
from .exceptions import StudentNotFoundError, AccessDeniedError, RateLimitExceededError

logger = logging.getLogger(__name__)

ABSENCE_THRESHOLD = 3
EXPECTED_CLASSES_PER_WEEK = 3
LATE_PAYMENT_GRACE_DAYS = 5
WHATSAPP_HOURLY_LIMIT = 10
REMINDER_LEAD = timedelta(hours=1)


def _start_of_month(now):
    local = timezone.localtime(now)
    first = local.date().replace(day=1)
    return timezone.make_aware(datetime.combine(first, time.min))


def _check_absences(school, admin, now):
    month_start = _start_of_month(now)
    today = timezone.localdate(now)
    days_since_start = (today - month_start.date()).days
    expected = (days_since_start * EXPECTED_CLASSES_PER_WEEK) // 7

    created = 0
    for student in school.students.filter(active=True):
        attended = Attendance.objects.filter(
            student=student,
            attendance_date__gte=month_start.date(),
        ).count()
        absences = expected - attended
        if absences < ABSENCE_THRESHOLD:
            continue

        already_sent = NotificationLog.objects.filter(
            user=admin,
            student=student,
            notification_type=NotificationType.REPEATED_ABSENCE,
            sent_at__gte=month_start,
        ).exists()
        if already_sent:
            continue

        NotificationLog.objects.create(
            user=admin,
            student=student,
            notification_type=NotificationType.REPEATED_ABSENCE,
            message=(
                f"Alerta: {student.full_name} teve {absences} faltas no mês atual. "
                f"Entre em contato com o responsável."
            ),
            sent_at=now,
        )
        created += 1
        logger.info("Repeated absence alert for student %s", student.id)

    return created


def _check_late_payments(school, admin, now):
    today = timezone.localdate(now)
    cutoff = now - timedelta(days=LATE_PAYMENT_GRACE_DAYS)

    late_payments = Payment.objects.filter(
        student__school=school,
        status=PaymentStatus.PENDING,
        due_date__lt=today - timedelta(days=LATE_PAYMENT_GRACE_DAYS),
    ).select_related('student')

    created = 0
    for payment in late_payments:
        already_sent = NotificationLog.objects.filter(
            user=admin,
            student=payment.student,
            notification_type=NotificationType.LATE_PAYMENT,
            sent_at__gte=cutoff,
        ).exists()
        if already_sent:
            continue

        days_late = (today - payment.due_date).days
        NotificationLog.objects.create(
            user=admin,
            student=payment.student,
            notification_type=NotificationType.LATE_PAYMENT,
            message=(
                f"Pagamento atrasado: {payment.student.full_name} possui pagamento "
                f"vencido há {days_late} dias (R$ {payment.amount})."
            ),
            sent_at=now,
        )
        created += 1
        logger.info("Late payment alert for student %s", payment.student_id)

    return created


def check_notification_triggers(now=None) -> int:
    """
    Scan every school and log alerts for its owner.

    Only schools whose owner has notifications enabled are scanned, and
    each check also respects the owner's per-type preference.

    Returns:
        int: Number of notifications created
    """
    now = now or timezone.now()
    total = 0

    for school in School.objects.select_related('admin'):
        admin = school.admin
        if not admin.notifications_enabled:
            continue
        if admin.email_on_absence:
            total += _check_absences(school, admin, now)
        if admin.email_on_late_payment:
            total += _check_late_payments(school, admin, now)

    logger.info("Notification triggers processed: %d created", total)
    return total


def _start_time_variants(moment):
    """'09:00' and '9:00' both pass schedule validation."""
    padded = moment.strftime('%H:%M')
    return {padded, f"{moment.hour}:{moment.minute:02d}"}


def send_class_reminders(now=None) -> int:
    """
    Queue a WhatsApp reminder for every student of a class starting in one hour.

    Weekdays follow the schedule convention where 0 is Sunday.

    Returns:
        int: Number of messages queued
    """
    target = timezone.localtime(now or timezone.now()) + REMINDER_LEAD
    day_of_week = (target.weekday() + 1) % 7

    schedules = ClassSchedule.objects.filter(
        day_of_week=day_of_week,
        start_time__in=_start_time_variants(target),
        dance_class__active=True,
    ).select_related('dance_class')

    queued = 0
    for schedule in schedules:
        dance_class = schedule.dance_class
        enrollments = Enrollment.objects.filter(
            dance_class=dance_class,
            status=EnrollmentStatus.ACTIVE,
            student__active=True,
        ).exclude(Q(student__phone='') | Q(student__phone__isnull=True)).select_related('student')

        for enrollment in enrollments:
            student = enrollment.student
            WhatsAppMessage.objects.create(
                phone=student.phone,
                message=f"🕺 Lembrete: Sua aula de {dance_class.name} começa em 1 hora! Não esqueça! 💃",
                student=student,
                type=WhatsAppMessageType.CLASS_REMINDER,
            )
            queued += 1
            logger.info("Reminder queued for student %s", student.id)

    logger.info("Class reminders queued: %d", queued)
    return queued


def queue_whatsapp_message(*, user, phone, message, student_id, message_type, now=None):
    """
    Queue a WhatsApp message on behalf of a school admin.

    Input format is validated by the caller; this enforces access and the
    hourly per-student limit.

    Raises:
        StudentNotFoundError: Unknown student
        AccessDeniedError: User is not admin of the student's school
        RateLimitExceededError: Student already has 10 messages in the last hour
    """
    now = now or timezone.now()
    try:
        student = Student.objects.select_related('school').get(id=student_id)
    except Student.DoesNotExist:
        raise StudentNotFoundError("Aluno não encontrado")

    if not student.school.is_admin(user):
        raise AccessDeniedError("Acesso negado")

    recent = WhatsAppMessage.objects.filter(
        student=student,
        created_at__gte=now - timedelta(hours=1),
    ).count()
    if recent >= WHATSAPP_HOURLY_LIMIT:
        raise RateLimitExceededError("Limite de mensagens excedido. Tente novamente mais tarde.")

    whatsapp = WhatsAppMessage.objects.create(
        phone=phone,
        message=message[:1000],
        student=student,
        type=message_type,
        created_at=now,
    )
    logger.info("WhatsApp message %s queued (%s)", whatsapp.id, message_type)

    # No provider is wired yet, so queued messages count as delivered
    whatsapp.status = WhatsAppMessageStatus.SENT
    whatsapp.sent_at = now
    whatsapp.save(update_fields=['status', 'sent_at'])
    return whatsapp


def send_notification(*, user, notification_type, message, student=None):
    """
    Log an alert for ``user`` and e-mail it, honouring their preferences.

    Returns:
        dict: {'success': bool, 'message': str}
    """
    if not user.notifications_enabled:
        return {'success': False, 'message': "Notificações desativadas"}

    if (
        (notification_type == NotificationType.ABSENCE and not user.email_on_absence) or
        (notification_type == NotificationType.LATE_PAYMENT and not user.email_on_late_payment)
    ):
        return {'success': False, 'message': f"Notificações de {notification_type} desativadas"}

    log = NotificationLog.objects.create(
        user=user,
        student=student,
        notification_type=notification_type,
        message=message,
    )

    sent = send_mail(
        subject=f"Notificação Xpace Control - {notification_type}",
        message=message,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
        fail_silently=True,
    )
    if not sent:
        log.status = NotificationStatus.FAILED
        log.save(update_fields=['status'])
        logger.warning("Notification e-mail to %s could not be delivered", user.email)
        return {'success': False, 'message': "Falha ao enviar notificação"}

    return {'success': True, 'message': "Notificação enviada com sucesso"}

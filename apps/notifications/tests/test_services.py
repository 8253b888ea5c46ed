import pytest
from datetime import date, datetime, timedelta
from decimal import Decimal
from django.core import mail
from django.utils import timezone
from apps.attendance.models import Attendance
from apps.payments.models import Payment, PaymentStatus
from apps.students.models import Student, ClassSchedule, Enrollment
from apps.notifications.models import (
    NotificationLog,
    NotificationType,
    NotificationStatus,
    WhatsAppMessage,
    WhatsAppMessageStatus,
)
from apps.notifications.services import (
    check_notification_triggers,
    send_class_reminders,
    queue_whatsapp_message,
    send_notification,
)
from apps.notifications.exceptions import StudentNotFoundError, AccessDeniedError, RateLimitExceededError


def local(*args):
    return timezone.make_aware(datetime(*args))


# =============================================================================
# Trigger Scan Tests
# =============================================================================

@pytest.mark.django_db
class TestAbsenceTriggers:
    """21 days into March, 9 classes are expected (3 per week)."""

    NOW = local(2025, 3, 22, 10, 0)

    @pytest.fixture(autouse=True)
    def only_absences(self, admin_user):
        admin_user.email_on_late_payment = False
        admin_user.save()

    def test_alerts_frequent_absentee(self, admin_user, student):
        created = check_notification_triggers(now=self.NOW)

        assert created == 1
        log = NotificationLog.objects.get()
        assert log.user == admin_user
        assert log.notification_type == NotificationType.REPEATED_ABSENCE
        assert log.message == (
            "Alerta: Ana Souza teve 9 faltas no mês atual. Entre em contato com o responsável."
        )

    def test_regular_student_not_alerted(self, student, dance_class):
        for day in range(1, 8):
            Attendance.objects.create(student=student, dance_class=dance_class, attendance_date=date(2025, 3, day))

        assert check_notification_triggers(now=self.NOW) == 0

    def test_one_alert_per_month(self, student):
        check_notification_triggers(now=self.NOW)

        assert check_notification_triggers(now=self.NOW + timedelta(days=2)) == 0
        assert check_notification_triggers(now=local(2025, 4, 28, 10, 0)) == 1

    def test_inactive_students_skipped(self, student):
        student.active = False
        student.save()

        assert check_notification_triggers(now=self.NOW) == 0

    def test_disabled_notifications(self, admin_user, student):
        admin_user.notifications_enabled = False
        admin_user.save()

        assert check_notification_triggers(now=self.NOW) == 0


@pytest.mark.django_db
class TestLatePaymentTriggers:

    NOW = local(2025, 3, 22, 10, 0)

    @pytest.fixture(autouse=True)
    def only_payments(self, admin_user):
        admin_user.email_on_absence = False
        admin_user.save()

    def _payment(self, student, due_date, status=PaymentStatus.PENDING):
        return Payment.objects.create(
            student=student,
            amount=Decimal('150.00'),
            due_date=due_date,
            status=status,
            reference_month=due_date.strftime('%Y-%m'),
        )

    def test_alerts_after_grace_period(self, student):
        self._payment(student, date(2025, 3, 10))

        assert check_notification_triggers(now=self.NOW) == 1
        assert NotificationLog.objects.get().message == (
            "Pagamento atrasado: Ana Souza possui pagamento vencido há 12 dias (R$ 150.00)."
        )

    def test_within_grace_period(self, student):
        self._payment(student, date(2025, 3, 17))

        assert check_notification_triggers(now=self.NOW) == 0

    def test_paid_payments_ignored(self, student):
        self._payment(student, date(2025, 3, 1), status=PaymentStatus.PAID)

        assert check_notification_triggers(now=self.NOW) == 0

    def test_deduplicated_for_five_days(self, student):
        self._payment(student, date(2025, 3, 10))
        check_notification_triggers(now=self.NOW)

        assert check_notification_triggers(now=self.NOW + timedelta(days=4)) == 0
        assert check_notification_triggers(now=self.NOW + timedelta(days=6)) == 1


# =============================================================================
# Class Reminder Tests
# =============================================================================

@pytest.mark.django_db
class TestClassReminders:
    """12 March 2025 is a Wednesday (day_of_week 3)."""

    def test_queues_reminder_one_hour_ahead(self, school, dance_class, student):
        ClassSchedule.objects.create(dance_class=dance_class, day_of_week=3, start_time='18:00', end_time='19:00')
        Enrollment.objects.create(student=student, dance_class=dance_class, start_date=date(2025, 1, 1))
        no_phone = Student.objects.create(school=school, full_name='Sem Telefone')
        Enrollment.objects.create(student=no_phone, dance_class=dance_class, start_date=date(2025, 1, 1))

        queued = send_class_reminders(now=local(2025, 3, 12, 17, 0))

        assert queued == 1
        message = WhatsAppMessage.objects.get()
        assert message.phone == '+5547999990000'
        assert message.message == "🕺 Lembrete: Sua aula de Jazz Adulto começa em 1 hora! Não esqueça! 💃"

    def test_unpadded_start_time(self, dance_class, student):
        ClassSchedule.objects.create(dance_class=dance_class, day_of_week=3, start_time='9:00', end_time='10:00')
        Enrollment.objects.create(student=student, dance_class=dance_class, start_date=date(2025, 1, 1))

        assert send_class_reminders(now=local(2025, 3, 12, 8, 0)) == 1

    def test_other_day_or_time(self, dance_class, student):
        ClassSchedule.objects.create(dance_class=dance_class, day_of_week=3, start_time='18:00', end_time='19:00')
        Enrollment.objects.create(student=student, dance_class=dance_class, start_date=date(2025, 1, 1))

        assert send_class_reminders(now=local(2025, 3, 13, 17, 0)) == 0
        assert send_class_reminders(now=local(2025, 3, 12, 16, 0)) == 0

    def test_inactive_class_skipped(self, dance_class, student):
        dance_class.active = False
        dance_class.save()
        ClassSchedule.objects.create(dance_class=dance_class, day_of_week=3, start_time='18:00', end_time='19:00')
        Enrollment.objects.create(student=student, dance_class=dance_class, start_date=date(2025, 1, 1))

        assert send_class_reminders(now=local(2025, 3, 12, 17, 0)) == 0


# =============================================================================
# WhatsApp Queue Tests
# =============================================================================

@pytest.mark.django_db
class TestQueueWhatsApp:

    def test_admin_queues_message(self, admin_user, student):
        message = queue_whatsapp_message(
            user=admin_user,
            phone='+5547999990000',
            message='Olá!',
            student_id=student.id,
            message_type='general',
        )

        assert message.status == WhatsAppMessageStatus.SENT
        assert message.sent_at is not None

    def test_teacher_denied(self, teacher_user, student):
        with pytest.raises(AccessDeniedError, match='Acesso negado'):
            queue_whatsapp_message(
                user=teacher_user, phone='+5547999990000', message='Olá!',
                student_id=student.id, message_type='general',
            )

    def test_unknown_student(self, admin_user, db):
        with pytest.raises(StudentNotFoundError, match='Aluno não encontrado'):
            queue_whatsapp_message(
                user=admin_user, phone='+5547999990000', message='Olá!',
                student_id='00000000-0000-0000-0000-000000000000', message_type='general',
            )

    def test_hourly_limit(self, admin_user, student):
        now = timezone.now()
        for minutes in range(10):
            WhatsAppMessage.objects.create(
                phone=student.phone, message='x', student=student, type='general', created_at=now - timedelta(minutes=minutes),
            )

        with pytest.raises(RateLimitExceededError):
            queue_whatsapp_message(
                user=admin_user, phone=student.phone, message='Olá!',
                student_id=student.id, message_type='general', now=now,
            )

    def test_old_messages_do_not_count(self, admin_user, student):
        now = timezone.now()
        for _ in range(10):
            WhatsAppMessage.objects.create(
                phone=student.phone, message='x', student=student, type='general', created_at=now - timedelta(hours=2),
            )

        queue_whatsapp_message(
            user=admin_user, phone=student.phone, message='Olá!',
            student_id=student.id, message_type='general', now=now,
        )


# =============================================================================
# Direct Notification Tests
# =============================================================================

@pytest.mark.django_db
class TestSendNotification:

    def test_sends_and_logs(self, admin_user, student):
        result = send_notification(
            user=admin_user, notification_type=NotificationType.ABSENCE, message='Faltou hoje', student=student,
        )

        assert result == {'success': True, 'message': 'Notificação enviada com sucesso'}
        assert NotificationLog.objects.get().status == NotificationStatus.SENT
        assert mail.outbox[0].to == [admin_user.email]

    def test_globally_disabled(self, admin_user):
        admin_user.notifications_enabled = False

        result = send_notification(user=admin_user, notification_type=NotificationType.GENERAL, message='Oi')

        assert result == {'success': False, 'message': 'Notificações desativadas'}
        assert not NotificationLog.objects.exists()

    def test_type_disabled(self, admin_user):
        admin_user.email_on_late_payment = False

        result = send_notification(user=admin_user, notification_type=NotificationType.LATE_PAYMENT, message='Oi')

        assert result == {'success': False, 'message': 'Notificações de late_payment desativadas'}

from io import StringIO

import pytest
from django.core.management import call_command
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User
from apps.schools.services import create_school
from apps.students.models import Student
from apps.notifications.models import NotificationLog, NotificationType, WhatsAppMessage


@pytest.mark.django_db
class TestSendWhatsAppAPI:
    """Tests for POST /api/notifications/whatsapp/send/"""

    def _payload(self, student, **overrides):
        payload = {
            'phone': '+5547999990000',
            'message': 'Sua mensalidade vence amanhã.',
            'studentId': str(student.id),
            'type': 'payment_reminder',
        }
        payload.update(overrides)
        return payload

    def test_admin_sends(self, admin_client, student):
        response = admin_client.post(reverse('notifications:send-whatsapp'), self._payload(student), format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert WhatsAppMessage.objects.filter(id=response.data['messageId']).exists()

    @pytest.mark.parametrize('field,value,error', [
        ('phone', '123', 'Formato de telefone inválido'),
        ('message', 'x' * 1001, 'Mensagem deve ter entre 1 e 1000 caracteres'),
        ('studentId', 'abc', 'ID do aluno inválido'),
        ('type', 'spam', 'Tipo de mensagem inválido'),
    ])
    def test_validation_messages(self, admin_client, student, field, value, error):
        response = admin_client.post(
            reverse('notifications:send-whatsapp'), self._payload(student, **{field: value}), format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'error': error}

    def test_teacher_forbidden(self, teacher_client, student):
        response = teacher_client.post(reverse('notifications:send-whatsapp'), self._payload(student), format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_rate_limited(self, admin_client, student):
        for _ in range(10):
            WhatsAppMessage.objects.create(phone=student.phone, message='x', student=student, type='general')

        response = admin_client.post(reverse('notifications:send-whatsapp'), self._payload(student), format='json')

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS

    def test_queue_listing_admin_only(self, admin_client, teacher_client, student):
        WhatsAppMessage.objects.create(phone=student.phone, message='x', student=student, type='general')

        assert admin_client.get(reverse('notifications:whatsapp-message-list')).data['count'] == 1
        assert teacher_client.get(reverse('notifications:whatsapp-message-list')).data['count'] == 0


@pytest.mark.django_db
class TestNotificationAPI:
    """Tests for /api/notifications/"""

    def test_send_and_list_own(self, teacher_client, student):
        response = teacher_client.post(
            reverse('notifications:send-notification'),
            {'notification_type': 'absence', 'message': 'Faltou hoje', 'student': str(student.id)},
            format='json',
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True

        response = teacher_client.get(reverse('notifications:notification-list'))
        assert response.data['count'] == 1
        assert response.data['results'][0]['student_name'] == 'Ana Souza'

    def test_student_of_other_school(self, teacher_client, db):
        owner = User.objects.create_user(email='x@example.com', password='TestPass123!')
        stranger = Student.objects.create(school=create_school(name='Outra', admin=owner), full_name='Zeca')

        response = teacher_client.post(
            reverse('notifications:send-notification'),
            {'notification_type': 'absence', 'message': 'Oi', 'student': str(stranger.id)},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestManagementCommands:

    def test_check_notification_triggers(self, student):
        out = StringIO()
        NotificationLog.objects.create(
            user=student.school.admin,
            student=student,
            notification_type=NotificationType.REPEATED_ABSENCE,
            message='already sent',
        )
        student.school.admin.email_on_late_payment = False
        student.school.admin.save()

        call_command('check_notification_triggers', stdout=out)

        assert 'Processamento concluído. 0 notificações enviadas.' in out.getvalue()

    def test_send_class_reminders(self, db):
        out = StringIO()

        call_command('send_class_reminders', stdout=out)

        assert 'Total reminders sent: 0' in out.getvalue()

import pytest
from unittest.mock import patch
from django.core import mail
from django.urls import reverse
from rest_framework import status
from apps.notifications.models import NotificationLog, NotificationStatus, NotificationType
from apps.schools.models import Lead, LeadStatus
from apps.schools.services import create_lead


LEAD_FORM = {
    'school_name': 'Studio Passo Certo',
    'city': 'Joinville',
    'whatsapp': '47999998888',
    'email': 'Contato@PassoCerto.com',
}


# =============================================================================
# Lead Capture Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateLead:

    def test_welcome_email_sent_and_logged(self):
        lead = create_lead(**LEAD_FORM)

        assert lead.email == 'contato@passocerto.com'
        assert lead.status == LeadStatus.NEW
        assert mail.outbox[0].to == ['contato@passocerto.com']
        assert mail.outbox[0].subject == 'Bem-vindo ao Xpace Control!'
        assert 'Olá, Studio Passo Certo!' in mail.outbox[0].body
        assert 'Joinville' in mail.outbox[0].body

        log = NotificationLog.objects.get()
        assert log.user is None
        assert log.recipient_email == 'contato@passocerto.com'
        assert log.notification_type == NotificationType.GENERAL
        assert log.message == 'Email de boas-vindas enviado para contato@passocerto.com'
        assert log.status == NotificationStatus.SENT

    def test_undelivered_email_logged_as_failed(self):
        with patch('apps.schools.services.leads.send_mail', return_value=0):
            lead = create_lead(**LEAD_FORM)

        assert Lead.objects.filter(id=lead.id).exists()
        assert NotificationLog.objects.get().status == NotificationStatus.FAILED


@pytest.mark.django_db
class TestLeadAPI:
    """Tests for /api/schools/leads/"""

    def test_public_contact_form(self, api_client):
        response = api_client.post(reverse('schools:lead-list'), LEAD_FORM, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'new'
        assert len(mail.outbox) == 1

    @pytest.mark.parametrize('field,value,message', [
        ('school_name', 'AB', 'Nome da escola deve ter pelo menos 3 caracteres'),
        ('city', 'J', 'Cidade inválida'),
        ('whatsapp', '4799', 'WhatsApp inválido'),
        ('email', 'contato', 'Email inválido'),
    ])
    def test_form_validation(self, api_client, field, value, message):
        response = api_client.post(reverse('schools:lead-list'), {**LEAD_FORM, field: value}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data[field] == [message]
        assert not Lead.objects.exists()

    def test_status_not_settable_by_public(self, api_client):
        response = api_client.post(
            reverse('schools:lead-list'), {**LEAD_FORM, 'status': 'converted'}, format='json',
        )

        assert response.data['status'] == 'new'

    def test_staff_moves_lead(self, staff_client):
        lead = create_lead(**LEAD_FORM)

        response = staff_client.patch(
            reverse('schools:lead-detail', args=[lead.id]), {'status': 'contacted'}, format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        lead.refresh_from_db()
        assert lead.status == LeadStatus.CONTACTED

    def test_staff_filters_board(self, staff_client):
        create_lead(**LEAD_FORM)
        Lead.objects.create(
            school_name='Ballet Sul', city='Curitiba', whatsapp='41999998888',
            email='sul@example.com', status=LeadStatus.DISCARDED,
        )

        response = staff_client.get(reverse('schools:lead-list'), {'status': 'new'})

        assert response.status_code == status.HTTP_200_OK
        assert [lead['school_name'] for lead in response.data['results']] == ['Studio Passo Certo']

    def test_resend_welcome_email(self, staff_client, platform_staff):
        lead = create_lead(**LEAD_FORM)

        response = staff_client.post(reverse('schools:lead-welcome-email', args=[lead.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert len(mail.outbox) == 2
        assert NotificationLog.objects.filter(user=platform_staff).count() == 1

    def test_school_admin_cannot_read_board(self, admin_client, school):
        create_lead(**LEAD_FORM)

        response = admin_client.get(reverse('schools:lead-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

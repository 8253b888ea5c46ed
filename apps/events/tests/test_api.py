import base64

import pytest
from django.urls import reverse
from rest_framework import status
from apps.events.models import TicketStatus
from apps.students.models import Student
from apps.schools.services import create_school
from apps.accounts.models import User


@pytest.mark.django_db
class TestEventViewSet:
    """Tests for /api/events/"""

    def test_admin_creates_event(self, admin_client, school):
        response = admin_client.post(
            reverse('events:event-list'),
            {
                'school': str(school.id),
                'title': 'Mostra de Dança',
                'event_date': '2025-11-20T19:00:00-03:00',
                'ticket_price': '25.00',
            },
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['tickets_sold'] == 0

    def test_reserve_and_list_tickets(self, admin_client, teacher_client, event, student):
        url = reverse('events:event-tickets', args=[event.id])

        response = admin_client.post(url, {'buyer_name': 'Ana Souza', 'student': str(student.id)}, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == TicketStatus.RESERVED
        assert response.data['amount'] == '40.00'

        response = teacher_client.get(url)
        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1

    def test_reserve_for_student_of_other_school(self, admin_client, event):
        owner = User.objects.create_user(email='x@example.com', password='TestPass123!')
        stranger = Student.objects.create(school=create_school(name='Outra', admin=owner), full_name='Zeca')

        response = admin_client.post(
            reverse('events:event-tickets', args=[event.id]),
            {'buyer_name': 'Zeca', 'student': str(stranger.id)},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestTicketEndpoints:

    def test_admin_confirms_payment(self, admin_client, teacher_client, reserved_ticket):
        url = reverse('events:pay-ticket', args=[reserved_ticket.id])

        assert teacher_client.post(url).status_code == status.HTTP_403_FORBIDDEN

        response = admin_client.post(url)
        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == TicketStatus.PAID

    def test_holder_generates_ticket(self, student_client, reserved_ticket):
        response = student_client.post(reverse('events:generate-ticket', args=[reserved_ticket.id]))

        assert response.status_code == status.HTTP_200_OK
        assert 'RESERVADO' in base64.b64decode(response.data['html']).decode('utf-8')

    def test_stranger_cannot_generate(self, student_client, paid_ticket):
        response = student_client.post(reverse('events:generate-ticket', args=[paid_ticket.id]))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_scan_flow(self, teacher_client, school, paid_ticket, reserved_ticket):
        url = reverse('events:scan-ticket')

        response = teacher_client.post(url, {'payload': paid_ticket.qr_payload, 'school': str(school.id)}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Acesso liberado para Maria Souza.'

        response = teacher_client.post(url, {'payload': paid_ticket.qr_payload, 'school': str(school.id)}, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT

        response = teacher_client.post(url, {'payload': reserved_ticket.qr_payload, 'school': str(school.id)}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        response = teacher_client.post(url, {'payload': 'TICKET:garbage', 'school': str(school.id)}, format='json')
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_scan_requires_staff(self, student_client, school, paid_ticket):
        response = student_client.post(
            reverse('events:scan-ticket'),
            {'payload': paid_ticket.qr_payload, 'school': str(school.id)},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

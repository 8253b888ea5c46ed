import pytest
from datetime import datetime
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.schools.models import SchoolMembership, SchoolRole
from apps.schools.services import create_school
from apps.students.models import Student
from apps.events.models import Event, Ticket, TicketStatus


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='School Owner',
        email_verified=True,
    )


@pytest.fixture
def teacher_user(db):
    return User.objects.create_user(
        email='teacher@example.com',
        password='TestPass123!',
        display_name='Teacher',
        email_verified=True,
    )


@pytest.fixture
def student_user(db):
    return User.objects.create_user(
        email='aluna@example.com',
        password='TestPass123!',
        display_name='Ana',
        email_verified=True,
    )


@pytest.fixture
def school(admin_user, teacher_user):
    school = create_school(name='Studio Ritmo', admin=admin_user, primary_color='#ff0066')
    SchoolMembership.objects.create(user=teacher_user, school=school, role=SchoolRole.TEACHER)
    return school


@pytest.fixture
def student(school, student_user):
    return Student.objects.create(school=school, full_name='Ana Souza', account=student_user)


@pytest.fixture
def event(school):
    return Event.objects.create(
        school=school,
        title='Espetáculo de Fim de Ano',
        event_date=timezone.make_aware(datetime(2025, 12, 13, 19, 0)),
        location='Teatro Municipal',
        ticket_price=Decimal('40.00'),
    )


@pytest.fixture
def reserved_ticket(event, student):
    return Ticket.objects.create(
        event=event, student=student, buyer_name='Ana Souza', amount=event.ticket_price,
    )


@pytest.fixture
def paid_ticket(event):
    return Ticket.objects.create(
        event=event, buyer_name='Maria Souza', amount=event.ticket_price, status=TicketStatus.PAID,
    )


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def teacher_client(teacher_user):
    return _client_for(teacher_user)


@pytest.fixture
def student_client(student_user):
    return _client_for(student_user)

import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.schools.models import SchoolMembership, SchoolRole
from apps.schools.services import create_school
from apps.students.models import Student
from apps.payments.models import Payment, PaymentStatus


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    return APIClient()


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
    school = create_school(name='Studio Ritmo', admin=admin_user)
    SchoolMembership.objects.create(user=teacher_user, school=school, role=SchoolRole.TEACHER)
    return school


@pytest.fixture
def student(school, student_user):
    return Student.objects.create(
        school=school,
        full_name='Ana Souza',
        email='ana@example.com',
        account=student_user,
    )


@pytest.fixture
def pending_payment(student):
    return Payment.objects.create(
        student=student,
        amount=Decimal('150.00'),
        due_date=date(2025, 3, 10),
        status=PaymentStatus.PENDING,
        reference_month='2025-03',
        payment_reference='pay_123',
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

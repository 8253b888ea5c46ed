import pytest
from datetime import date, timedelta
from decimal import Decimal
from unittest.mock import Mock
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.attendance.models import Attendance
from apps.payments.models import Payment
from apps.schools.models import SchoolMembership, SchoolRole
from apps.schools.services import create_school
from apps.students.models import Student, DanceClass


TODAY = date(2025, 3, 12)


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
def school(admin_user, teacher_user):
    school = create_school(name='Studio Ritmo', admin=admin_user)
    SchoolMembership.objects.create(user=teacher_user, school=school, role=SchoolRole.TEACHER)
    return school


@pytest.fixture
def dance_class(school):
    return DanceClass.objects.create(school=school, name='Ballet Adulto', schedule_day='Segunda', schedule_time='19:00')


@pytest.fixture
def make_student(school):
    def _make(name, **fields):
        return Student.objects.create(school=school, full_name=name, **fields)
    return _make


@pytest.fixture
def other_school_student(admin_user):
    other = create_school(name='Outra Escola', admin=admin_user)
    student = Student.objects.create(school=other, full_name='Pedro Alves')
    Payment.objects.create(student=student, amount=Decimal('80.00'), due_date=date(2025, 3, 1))
    return student


@pytest.fixture
def attend(dance_class):
    """Record ``count`` attendances on consecutive days ending ``until``."""
    def _attend(student, count, until=TODAY):
        for offset in range(count):
            Attendance.objects.create(
                student=student,
                dance_class=dance_class,
                attendance_date=until - timedelta(days=offset),
            )
    return _attend


@pytest.fixture
def ai_client():
    """Stand-in gateway client returning a fixed reply."""
    return Mock(complete=Mock(return_value='Sugestões da IA'))


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def teacher_client(teacher_user):
    return _client_for(teacher_user)


@pytest.fixture
def outsider_client(db):
    outsider = User.objects.create_user(email='outsider@example.com', password='TestPass123!')
    return _client_for(outsider)


@pytest.fixture
def api_client():
    return APIClient()

import pytest
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.schools.models import SchoolMembership, SchoolRole
from apps.schools.services import create_school
from apps.students.models import Student, DanceClass, Enrollment


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
    """Login linked to the enrolled student."""
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
def dance_class(school, teacher_user):
    return DanceClass.objects.create(
        school=school,
        teacher=teacher_user,
        name='Hip Hop Teen',
        schedule_day='Quarta',
        schedule_time='17:00',
    )


@pytest.fixture
def student(school, student_user):
    return Student.objects.create(school=school, full_name='Ana Souza', account=student_user)


@pytest.fixture
def enrollment(student, dance_class):
    return Enrollment.objects.create(student=student, dance_class=dance_class, start_date=date(2025, 1, 1))


@pytest.fixture
def teacher_client(teacher_user):
    return _client_for(teacher_user)


@pytest.fixture
def student_client(student_user):
    return _client_for(student_user)

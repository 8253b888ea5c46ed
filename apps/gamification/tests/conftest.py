import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.schools.models import SchoolMembership, SchoolRole
from apps.schools.services import create_school
from apps.students.models import Student
from apps.gamification.models import Achievement


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
    school = create_school(name='Studio Ritmo', admin=admin_user)
    SchoolMembership.objects.create(user=teacher_user, school=school, role=SchoolRole.TEACHER)
    return school


@pytest.fixture
def student(school, student_user):
    return Student.objects.create(school=school, full_name='Ana Souza', account=student_user)


@pytest.fixture
def achievements(school):
    return [
        Achievement.objects.create(school=school, name='Primeira Aula', points_required=10),
        Achievement.objects.create(school=school, name='Dedicado', points_required=100),
    ]


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def teacher_client(teacher_user):
    return _client_for(teacher_user)


@pytest.fixture
def student_client(student_user):
    return _client_for(student_user)

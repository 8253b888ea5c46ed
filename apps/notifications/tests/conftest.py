import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.schools.models import SchoolMembership, SchoolRole
from apps.schools.services import create_school
from apps.students.models import Student, DanceClass


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
def student(school):
    return Student.objects.create(school=school, full_name='Ana Souza', phone='+5547999990000')


@pytest.fixture
def dance_class(school):
    return DanceClass.objects.create(
        school=school, name='Jazz Adulto', schedule_day='Quarta', schedule_time='18:00',
    )


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def teacher_client(teacher_user):
    return _client_for(teacher_user)

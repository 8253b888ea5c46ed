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
def parent_user(db):
    return User.objects.create_user(
        email='parent@example.com',
        password='TestPass123!',
        display_name='Parent',
        email_verified=True,
    )


@pytest.fixture
def school(admin_user, teacher_user):
    school = create_school(name='Studio Ritmo', admin=admin_user)
    SchoolMembership.objects.create(user=teacher_user, school=school, role=SchoolRole.TEACHER)
    return school


@pytest.fixture
def other_school(db):
    owner = User.objects.create_user(email='other-owner@example.com', password='TestPass123!')
    return create_school(name='Outra Escola', admin=owner)


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def teacher_client(teacher_user):
    return _client_for(teacher_user)


@pytest.fixture
def parent_client(parent_user):
    return _client_for(parent_user)


@pytest.fixture
def student(school):
    return Student.objects.create(school=school, full_name='Ana Souza', email='ana@example.com')


@pytest.fixture
def dance_class(school, teacher_user):
    return DanceClass.objects.create(
        school=school,
        teacher=teacher_user,
        name='Ballet Infantil',
        schedule_day='Segunda',
        schedule_time='18:00',
        max_students=2,
    )


@pytest.fixture
def enrollment(student, dance_class):
    return Enrollment.objects.create(student=student, dance_class=dance_class, start_date=date(2025, 3, 1))

import pytest
from django.urls import reverse
from rest_framework import status
from apps.gamification.services import award_points
from apps.students.models import Student


@pytest.mark.django_db
class TestStudentPoints:
    """Tests for GET /api/gamification/students/{id}/points/"""

    def test_student_sees_own_points(self, student_client, student, achievements):
        award_points(student=student, points=10, reason='Presença em aula')

        response = student_client.get(reverse('gamification:student-points', args=[student.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_points'] == 10
        assert response.data['achievements_count'] == 1

    def test_teacher_sees_points(self, teacher_client, student):
        response = teacher_client.get(reverse('gamification:student-points', args=[student.id]))

        assert response.status_code == status.HTTP_200_OK

    def test_stranger_denied(self, student_client, school):
        other = Student.objects.create(school=school, full_name='Bruno Lima')

        response = student_client.get(reverse('gamification:student-points', args=[other.id]))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestAwardPointsAPI:
    """Tests for POST /api/gamification/students/{id}/award/"""

    def test_teacher_awards(self, teacher_client, student, achievements):
        response = teacher_client.post(
            reverse('gamification:award-points', args=[student.id]),
            {'points': 15, 'reason': 'Apresentação'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert [a['name'] for a in response.data['unlocked']] == ['Primeira Aula']

    def test_zero_points_rejected(self, teacher_client, student):
        response = teacher_client.post(
            reverse('gamification:award-points', args=[student.id]),
            {'points': 0, 'reason': 'Nada'},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_student_cannot_award(self, student_client, student):
        response = student_client.post(
            reverse('gamification:award-points', args=[student.id]),
            {'points': 100, 'reason': 'Eu mereço'},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestAchievementsAPI:
    """Tests for /api/gamification/achievements/"""

    def test_admin_creates_achievement(self, admin_client, school):
        response = admin_client.post(
            reverse('gamification:achievement-list'),
            {'school': str(school.id), 'name': 'Maratonista', 'points_required': 500},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED

    def test_teacher_cannot_create(self, teacher_client, school):
        response = teacher_client.post(
            reverse('gamification:achievement-list'),
            {'school': str(school.id), 'name': 'Maratonista', 'points_required': 500},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_leaderboard(self, teacher_client, school, student):
        award_points(student=student, points=30, reason='Presença em aula')

        response = teacher_client.get(reverse('gamification:leaderboard', args=[school.id]))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['name'] == 'Ana Souza'

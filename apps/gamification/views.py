from rest_framework import viewsets, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema

from apps.schools.mixins import SchoolScopedViewSetMixin
from apps.schools.services import get_school_for_user, SchoolsServiceError, SchoolNotFoundError
from apps.students.models import Student
from .models import Achievement
from .serializers import (
    AchievementSerializer,
    PointEntrySerializer,
    AwardPointsSerializer,
    PointsSummarySerializer,
    LeaderboardEntrySerializer,
)
from .services import award_points, points_summary, leaderboard


class AchievementViewSet(SchoolScopedViewSetMixin, viewsets.ModelViewSet):
    """Badges configured by each school."""

    queryset = Achievement.objects.all()
    serializer_class = AchievementSerializer
    permission_classes = [IsAuthenticated]

    def perform_create(self, serializer):
        self.check_school_write(serializer.validated_data['school'])
        serializer.save()


def _student_for(request, student_id):
    """Student visible to the caller: school staff, or the linked account."""
    student = get_object_or_404(Student.objects.select_related('school'), id=student_id)
    if student.account_id == request.user.id or student.school.is_staff_member(request.user):
        return student
    return None


@extend_schema(
    responses={200: PointsSummarySerializer},
    description="Point total, unlocked achievements and next threshold for a student.",
    tags=['gamification'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def student_points(request, student_id):
    student = _student_for(request, student_id)
    if student is None:
        return Response({'error': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)
    return Response(PointsSummarySerializer(points_summary(student)).data)


@extend_schema(
    request=AwardPointsSerializer,
    responses={201: PointEntrySerializer},
    description="Award (or deduct) points manually. Staff only.",
    tags=['gamification'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def award_student_points(request, student_id):
    student = get_object_or_404(Student.objects.select_related('school'), id=student_id)
    if not student.school.is_staff_member(request.user):
        return Response({'error': 'Only school staff can award points'}, status=status.HTTP_403_FORBIDDEN)

    serializer = AwardPointsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    entry, unlocked = award_points(student=student, **serializer.validated_data)
    data = PointEntrySerializer(entry).data
    data['unlocked'] = AchievementSerializer(unlocked, many=True).data
    return Response(data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: LeaderboardEntrySerializer(many=True)},
    description="Top students of a school by points.",
    tags=['gamification'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def school_leaderboard(request, school_id):
    try:
        school = get_school_for_user(school_id=school_id, user=request.user)
    except SchoolNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except SchoolsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(LeaderboardEntrySerializer(leaderboard(school_id=school.id), many=True).data)

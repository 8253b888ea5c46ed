"""
Gamification services.

Points are an append-only ledger; achievements unlock when the running
total crosses their threshold and are never revoked.
"""

import logging

from django.db import transaction
from django.db.models import Sum

from apps.students.models import Student
from .models import Achievement, PointEntry, StudentAchievement

logger = logging.getLogger(__name__)

ATTENDANCE_POINTS = 10


def total_points(student: Student) -> int:
    return student.point_entries.aggregate(total=Sum('points'))['total'] or 0


@transaction.atomic
def award_points(*, student: Student, points: int, reason: str):
    """
    Add a ledger entry and unlock every achievement now within reach.

    Args:
        student: Student receiving the points
        points: Amount (negative values deduct)
        reason: Human readable reason shown in the history

    Returns:
        tuple: (PointEntry, list of newly unlocked Achievement)
    """
    # Serialize concurrent awards for the same student
    Student.objects.select_for_update().filter(id=student.id).first()

    entry = PointEntry.objects.create(student=student, points=points, reason=reason)
    total = total_points(student)

    already = StudentAchievement.objects.filter(student=student).values('achievement_id')
    reachable = Achievement.objects.filter(
        school_id=student.school_id,
        points_required__lte=total,
    ).exclude(id__in=already)

    unlocked = []
    for achievement in reachable:
        StudentAchievement.objects.create(student=student, achievement=achievement)
        unlocked.append(achievement)
        logger.info("Student %s unlocked achievement %s", student.id, achievement.name)

    return entry, unlocked


def points_summary(student: Student) -> dict:
    """Total, unlocked count and the threshold of the next badge."""
    total = total_points(student)
    next_achievement = (
        Achievement.objects
        .filter(school_id=student.school_id, points_required__gt=total)
        .order_by('points_required')
        .first()
    )
    return {
        'student_id': student.id,
        'total_points': total,
        'achievements_count': student.achievements.count(),
        'next_achievement_points': next_achievement.points_required if next_achievement else None,
    }


def leaderboard(*, school_id, limit: int = 10) -> list:
    rows = (
        PointEntry.objects
        .filter(student__school_id=school_id, student__active=True)
        .values('student_id', 'student__full_name')
        .annotate(total=Sum('points'))
        .order_by('-total')[:limit]
    )
    return [
        {'student_id': r['student_id'], 'name': r['student__full_name'], 'total_points': r['total']}
        for r in rows
    ]

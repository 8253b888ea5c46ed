"""Subscription and plan-limit checks."""

from apps.schools.models import School, Subscription, SubscriptionStatus

from .exceptions import StudentLimitReachedError


def get_subscription(school: School) -> Subscription:
    """Return the school's subscription, opening a trial when missing."""
    subscription, _ = Subscription.objects.select_related('plan').get_or_create(
        school=school,
        defaults={'status': SubscriptionStatus.TRIAL},
    )
    return subscription


def ensure_can_add_student(school: School) -> None:
    """
    Raise when the plan's student limit is already reached.

    Raises:
        StudentLimitReachedError: If current active students >= plan limit
    """
    subscription = get_subscription(school)
    current = school.students.filter(active=True).count()
    if not subscription.can_add_student(current):
        raise StudentLimitReachedError(
            "Limite de alunos do plano atingido. Faça upgrade para adicionar mais alunos."
        )


def subscription_summary(school: School) -> dict:
    subscription = get_subscription(school)
    plan = subscription.plan
    return {
        'status': subscription.status,
        'is_active': subscription.is_active(),
        'days_remaining': subscription.days_remaining(),
        'renew_at': subscription.renew_at,
        'plan': plan.name if plan else None,
        'student_limit': plan.student_limit if plan else None,
        'current_students': school.students.filter(active=True).count(),
    }

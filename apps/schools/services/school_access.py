"""
Tenant access helpers.

Every school-scoped operation starts by resolving the school and checking
the caller's role in it. Apps call these instead of repeating the lookup.
"""

from typing import Iterable, Optional
from uuid import UUID

from apps.accounts.models import User
from apps.schools.models import School, SchoolRole, STAFF_ROLES

from .exceptions import SchoolNotFoundError, InsufficientPermissionsError


def get_school_for_user(
    *,
    school_id: UUID,
    user: User,
    roles: Optional[Iterable[str]] = None
) -> School:
    """
    Load a school and verify the user holds one of ``roles`` in it.

    Args:
        school_id: UUID of the school
        user: Acting user
        roles: Accepted roles; None accepts any membership

    Raises:
        SchoolNotFoundError: If the school doesn't exist
        InsufficientPermissionsError: If the user's role is not accepted
    """
    try:
        school = School.objects.get(id=school_id)
    except School.DoesNotExist:
        raise SchoolNotFoundError(f"School with ID {school_id} not found")

    role = school.get_user_role(user)
    if role is None or (roles is not None and role not in roles):
        raise InsufficientPermissionsError("You do not have access to this school")

    return school


def get_school_for_admin(*, school_id: UUID, user: User) -> School:
    return get_school_for_user(school_id=school_id, user=user, roles=[SchoolRole.ADMIN])


def get_school_for_staff(*, school_id: UUID, user: User) -> School:
    return get_school_for_user(school_id=school_id, user=user, roles=STAFF_ROLES)


def schools_for_user(user: User, roles: Optional[Iterable[str]] = None):
    """Schools where the user has a membership (optionally with given roles)."""
    memberships = user.school_memberships.all()
    if roles is not None:
        memberships = memberships.filter(role__in=list(roles))
    return School.objects.filter(id__in=memberships.values('school_id'))

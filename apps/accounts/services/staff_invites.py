"""
Staff invitation service.

Admins bring teachers and co-admins into their school by email. The
invited account is created on the fly when it does not exist yet and
receives a membership carrying the requested role.
"""

import logging
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.schools.models import School, SchoolMembership, SchoolRole

from .exceptions import (
    StaffInviteError,
    InsufficientPermissionsError,
    SchoolNotFoundError,
)

User = get_user_model()
logger = logging.getLogger(__name__)

INVITABLE_ROLES = (SchoolRole.ADMIN, SchoolRole.TEACHER)


@transaction.atomic
def invite_staff(
    *,
    email: Optional[str],
    role: Optional[str],
    school_id: Optional[UUID],
    invited_by: User
) -> User:
    """
    Invite a staff member to a school.

    Args:
        email: Email of the person being invited
        role: 'admin' or 'teacher'
        school_id: School the person will work for
        invited_by: Authenticated user sending the invite

    Returns:
        The invited User (existing or newly created)

    Raises:
        StaffInviteError: If email, role or school_id is missing or role is unknown
        SchoolNotFoundError: If the school does not exist
        InsufficientPermissionsError: If invited_by is not a school admin
    """
    if not email or not role or not school_id:
        raise StaffInviteError("Email, role e schoolId são obrigatórios.")

    if role not in INVITABLE_ROLES:
        raise StaffInviteError(f"Função inválida: {role}")

    try:
        school = School.objects.get(id=school_id)
    except School.DoesNotExist:
        raise SchoolNotFoundError(f"School with ID {school_id} not found")

    if not school.is_admin(invited_by):
        raise InsufficientPermissionsError("Apenas administradores podem convidar novos membros.")

    email = User.objects.normalize_email(email)
    user = User.objects.filter(email__iexact=email).first()
    if user is None:
        user = User.objects.create_user(
            email=email,
            password=None,
            display_name=email,
            email_verified=False,
        )
        logger.info("Created account %s from staff invite", email)

    membership, created = SchoolMembership.objects.get_or_create(
        user=user,
        school=school,
        defaults={'role': role},
    )
    if not created and membership.role != role:
        membership.role = role
        membership.save(update_fields=['role'])

    logger.info("User %s invited to school %s as %s", user.email, school.id, membership.role)
    return user

"""
School management service.

Handles school CRUD operations with proper transaction safety.
"""

from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.schools.models import (
    School,
    SchoolMembership,
    SchoolRole,
    Subscription,
    SubscriptionStatus,
)

from .exceptions import (
    SchoolNotFoundError,
    InsufficientPermissionsError,
    NotMemberError,
    CannotChangeOwnerRoleError,
)


@transaction.atomic
def create_school(
    *,
    name: str,
    admin: User,
    city: str = '',
    contact_email: str = '',
    contact_phone: str = '',
    logo_url: str = '',
    primary_color: str = '#6324b2'
) -> School:
    """
    Create a school, make the creator its admin and open a trial subscription.

    Args:
        name: School name
        admin: User who will own the school
        city, contact_email, contact_phone, logo_url, primary_color: Profile data

    Returns:
        Created School instance
    """
    school = School.objects.create(
        name=name,
        admin=admin,
        city=city,
        contact_email=contact_email,
        contact_phone=contact_phone,
        logo_url=logo_url,
        primary_color=primary_color,
    )
    SchoolMembership.objects.create(user=admin, school=school, role=SchoolRole.ADMIN)
    Subscription.objects.create(school=school, status=SubscriptionStatus.TRIAL)
    return school


@transaction.atomic
def delete_school(*, school_id: UUID, user: User) -> None:
    """
    Delete a school (owner only).

    Raises:
        SchoolNotFoundError: If school doesn't exist
        InsufficientPermissionsError: If user is not the owner
    """
    try:
        school = School.objects.select_for_update().get(id=school_id)
    except School.DoesNotExist:
        raise SchoolNotFoundError(f"School with ID {school_id} not found")

    if school.admin_id != user.id:
        raise InsufficientPermissionsError("Only the school owner can delete the school")

    school.delete()


@transaction.atomic
def update_member_role(
    *,
    school_id: UUID,
    user_id: UUID,
    new_role: str,
    updated_by: User
) -> SchoolMembership:
    """
    Change a member's role (admin only).

    Raises:
        SchoolNotFoundError: If school doesn't exist
        InsufficientPermissionsError: If updated_by is not admin
        CannotChangeOwnerRoleError: If the target is the owner
        NotMemberError: If the target is not a member
    """
    try:
        school = School.objects.get(id=school_id)
    except School.DoesNotExist:
        raise SchoolNotFoundError(f"School with ID {school_id} not found")

    if not school.is_admin(updated_by):
        raise InsufficientPermissionsError("Only school admins can change roles")

    if str(school.admin_id) == str(user_id):
        raise CannotChangeOwnerRoleError("Cannot change the school owner's role")

    try:
        membership = (
            SchoolMembership.objects
            .select_for_update()
            .get(school=school, user_id=user_id)
        )
    except SchoolMembership.DoesNotExist:
        raise NotMemberError("User is not a member of this school")

    membership.role = new_role
    membership.save(update_fields=['role'])
    return membership

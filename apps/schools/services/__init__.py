"""
Schools app services layer.

Tenant resolution, school lifecycle, subscription limits and leads.
"""

from .exceptions import (
    SchoolsServiceError,
    SchoolNotFoundError,
    InsufficientPermissionsError,
    StudentLimitReachedError,
    UnitNotFoundError,
    NotMemberError,
    CannotChangeOwnerRoleError,
)
from .school_access import (
    get_school_for_user,
    get_school_for_admin,
    get_school_for_staff,
    schools_for_user,
)
from .school_management import (
    create_school,
    delete_school,
    update_member_role,
)
from .subscriptions import (
    get_subscription,
    ensure_can_add_student,
    subscription_summary,
)
from .leads import (
    create_lead,
    send_welcome_email,
)


__all__ = [
    # Exceptions
    'SchoolsServiceError',
    'SchoolNotFoundError',
    'InsufficientPermissionsError',
    'StudentLimitReachedError',
    'UnitNotFoundError',
    'NotMemberError',
    'CannotChangeOwnerRoleError',

    # Access
    'get_school_for_user',
    'get_school_for_admin',
    'get_school_for_staff',
    'schools_for_user',

    # Management
    'create_school',
    'delete_school',
    'update_member_role',

    # Subscriptions
    'get_subscription',
    'ensure_can_add_student',
    'subscription_summary',

    # Leads
    'create_lead',
    'send_welcome_email',
]

"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    StaffInviteError,
    InsufficientPermissionsError,
    SchoolNotFoundError,
)
from .user_registration import register_user
from .staff_invites import invite_staff

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'StaffInviteError',
    'InsufficientPermissionsError',
    'SchoolNotFoundError',
    # Services
    'register_user',
    'invite_staff',
]

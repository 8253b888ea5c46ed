"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    pass


class StaffInviteError(AccountsServiceError):
    """Raised when an invite is missing required data."""
    pass


class InsufficientPermissionsError(AccountsServiceError):
    """Raised when the inviter is not an admin of the school."""
    pass


class SchoolNotFoundError(AccountsServiceError):
    """Raised when the target school does not exist."""
    pass

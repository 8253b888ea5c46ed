"""
Domain-specific exceptions for schools app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class SchoolsServiceError(Exception):
    """Base exception for all schools service errors."""
    pass


class SchoolNotFoundError(SchoolsServiceError):
    """Raised when a school does not exist or is inaccessible."""
    pass


class InsufficientPermissionsError(SchoolsServiceError):
    """Raised when a user lacks the school role an action requires."""
    pass


class StudentLimitReachedError(SchoolsServiceError):
    """Raised when the school's plan does not allow more students."""
    pass


class UnitNotFoundError(SchoolsServiceError):
    """Raised when a unit does not belong to the school."""
    pass


class NotMemberError(SchoolsServiceError):
    """Raised when the target user has no membership in the school."""
    pass


class CannotChangeOwnerRoleError(SchoolsServiceError):
    """Raised when attempting to change the owner's role."""
    pass

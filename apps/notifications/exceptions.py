"""
Domain exceptions for notifications app.

Messages are user-facing and kept in Portuguese.
"""


class NotificationServiceError(Exception):
    """Base exception for notification service errors."""
    pass


class StudentNotFoundError(NotificationServiceError):
    pass


class AccessDeniedError(NotificationServiceError):
    pass


class RateLimitExceededError(NotificationServiceError):
    """Raised when a student already received too many messages this hour."""
    pass

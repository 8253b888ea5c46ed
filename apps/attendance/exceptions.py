"""
Domain exceptions for attendance app.

Messages are shown to students on the check-in screen as-is.
"""


class AttendanceServiceError(Exception):
    """Base exception for attendance service errors."""
    pass


class InvalidTokenError(AttendanceServiceError):
    """Raised when the scanned token does not exist."""
    pass


class TokenExpiredError(AttendanceServiceError):
    """Raised when the token is used outside its validity window."""
    pass


class NoLinkedStudentError(AttendanceServiceError):
    """Raised when the account has no student record."""
    pass


class NotEnrolledError(AttendanceServiceError):
    """Raised when the student has no active enrollment in the class."""
    pass


class AlreadyCheckedInError(AttendanceServiceError):
    """Raised when attendance for today already exists."""
    pass


class QRGenerationError(AttendanceServiceError):
    """QR code image generation failed."""
    pass


class NotClassStaffError(AttendanceServiceError):
    """Raised when a non-staff user manages attendance of a class."""
    pass

"""Domain-specific exceptions for students services."""


class StudentsServiceError(Exception):
    """Base exception for students services."""
    pass


class CrossSchoolReferenceError(StudentsServiceError):
    """Raised when related records belong to different schools."""
    pass


class ClassFullError(StudentsServiceError):
    """Raised when a class already holds max_students active enrollments."""
    pass


class AlreadyEnrolledError(StudentsServiceError):
    """Raised when the student is already enrolled in the class."""
    pass


class GuardianAlreadyLinkedError(StudentsServiceError):
    """Raised when the guardian is already linked to the student."""
    pass


class InviteAlreadySentError(StudentsServiceError):
    """Raised when an open invite already exists for the e-mail and student."""
    pass


class InvalidInviteError(StudentsServiceError):
    """Raised when the invite token is unknown or already used."""
    pass


class InviteExpiredError(StudentsServiceError):
    """Raised when the invite is past its expiry date."""
    pass


class InviteEmailMismatchError(StudentsServiceError):
    """Raised when the invite is accepted from a different e-mail account."""
    pass

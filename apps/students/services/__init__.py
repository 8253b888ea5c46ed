"""
Students app services layer.

Student creation under plan limits, enrollment capacity, guardian links
and guardian invitations.
"""

from .exceptions import (
    StudentsServiceError,
    CrossSchoolReferenceError,
    ClassFullError,
    AlreadyEnrolledError,
    GuardianAlreadyLinkedError,
    InviteAlreadySentError,
    InvalidInviteError,
    InviteExpiredError,
    InviteEmailMismatchError,
)
from .student_management import create_student
from .enrollment_management import enroll_student, update_enrollment
from .guardian_management import link_guardian, invite_guardian, accept_guardian_invite

__all__ = [
    # Exceptions
    'StudentsServiceError',
    'CrossSchoolReferenceError',
    'ClassFullError',
    'AlreadyEnrolledError',
    'GuardianAlreadyLinkedError',
    'InviteAlreadySentError',
    'InvalidInviteError',
    'InviteExpiredError',
    'InviteEmailMismatchError',
    # Services
    'create_student',
    'enroll_student',
    'update_enrollment',
    'link_guardian',
    'invite_guardian',
    'accept_guardian_invite',
]

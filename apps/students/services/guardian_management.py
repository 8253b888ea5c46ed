"""Guardian linking and e-mailed guardian invitations."""

import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction, IntegrityError
from django.utils import timezone

from apps.accounts.models import User
from apps.schools.models import SchoolMembership, SchoolRole
from apps.students.models import (
    Student,
    Guardian,
    StudentGuardian,
    GuardianInvite,
    GuardianInviteStatus,
)

from .exceptions import (
    GuardianAlreadyLinkedError,
    InviteAlreadySentError,
    InvalidInviteError,
    InviteExpiredError,
    InviteEmailMismatchError,
)

logger = logging.getLogger(__name__)

INVITE_TTL = timedelta(days=7)


@transaction.atomic
def link_guardian(
    *,
    student: Student,
    user: User,
    phone: str = '',
    relationship: str = ''
) -> StudentGuardian:
    """
    Link a guardian account to a student.

    Creates the Guardian profile on first link and gives the user the
    parent role in the student's school unless they already hold a role.

    Raises:
        GuardianAlreadyLinkedError: If the link already exists
    """
    guardian, created = Guardian.objects.get_or_create(user=user, defaults={'phone': phone})
    if not created and phone and guardian.phone != phone:
        guardian.phone = phone
        guardian.save(update_fields=['phone'])

    SchoolMembership.objects.get_or_create(
        user=user,
        school=student.school,
        defaults={'role': SchoolRole.PARENT},
    )

    try:
        with transaction.atomic():
            return StudentGuardian.objects.create(
                student=student,
                guardian=guardian,
                relationship=relationship,
            )
    except IntegrityError:
        raise GuardianAlreadyLinkedError("Responsável já vinculado a este aluno")


def _invite_message(invite: GuardianInvite) -> str:
    invite_url = f"{settings.FRONTEND_URL.rstrip('/')}/guardian/aceitar-convite/{invite.token}"
    return (
        f"Olá! Você foi convidado para acompanhar o aluno {invite.student.full_name} "
        f"na plataforma {invite.student.school.name}.\n\n"
        f"Acesse: {invite_url}\n\n"
        f"Este convite é válido por 7 dias.\n\n"
        f"Após criar sua conta, você poderá:\n"
        f"- Ver frequência e notas\n"
        f"- Acompanhar pagamentos\n"
        f"- Receber notificações\n"
    )


@transaction.atomic
def invite_guardian(
    *,
    student: Student,
    guardian_email: str,
    invited_by: User,
    now=None
) -> GuardianInvite:
    """
    Create a guardian invite valid for seven days and e-mail its link.

    Pending invites for the same e-mail and student that are past their
    expiry are marked expired first.

    Raises:
        InviteAlreadySentError: An open invite already exists
    """
    now = now or timezone.now()
    guardian_email = guardian_email.strip().lower()

    pending = GuardianInvite.objects.filter(
        student=student,
        guardian_email=guardian_email,
        status=GuardianInviteStatus.PENDING,
    )
    pending.filter(expires_at__lt=now).update(status=GuardianInviteStatus.EXPIRED)
    if pending.filter(expires_at__gte=now).exists():
        raise InviteAlreadySentError("Convite já enviado recentemente")

    invite = GuardianInvite.objects.create(
        student=student,
        invited_by=invited_by,
        guardian_email=guardian_email,
        token=secrets.token_urlsafe(32),
        expires_at=now + INVITE_TTL,
    )

    sent = send_mail(
        subject=f"Convite para acompanhar {student.full_name} - Xpace Control",
        message=_invite_message(invite),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[guardian_email],
        fail_silently=True,
    )
    if not sent:
        logger.warning("Guardian invite %s could not be e-mailed", invite.id)

    logger.info("Guardian invite %s created for student %s", invite.id, student.id)
    return invite


@transaction.atomic
def accept_guardian_invite(*, token: str, user: User, now=None) -> StudentGuardian:
    """
    Redeem an invite token for the logged-in guardian account.

    Raises:
        InvalidInviteError: Unknown or already used token
        InviteExpiredError: Past expiry
        InviteEmailMismatchError: Account e-mail differs from the invited one
        GuardianAlreadyLinkedError: The account already follows the student
    """
    now = now or timezone.now()

    try:
        invite = GuardianInvite.objects.select_for_update().select_related('student__school').get(token=token)
    except GuardianInvite.DoesNotExist:
        raise InvalidInviteError("Convite inválido")

    if invite.status == GuardianInviteStatus.ACCEPTED:
        raise InvalidInviteError("Convite já utilizado")
    if not invite.is_open_at(now):
        raise InviteExpiredError("Convite expirado")
    if user.email.lower() != invite.guardian_email:
        raise InviteEmailMismatchError("Este convite foi enviado para outro e-mail")

    link = link_guardian(student=invite.student, user=user)

    invite.status = GuardianInviteStatus.ACCEPTED
    invite.accepted_at = now
    invite.save(update_fields=['status', 'accepted_at'])

    logger.info("Guardian invite %s accepted by user %s", invite.id, user.id)
    return link

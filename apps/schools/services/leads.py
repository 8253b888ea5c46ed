"""
Lead capture service.

Landing page leads get a welcome e-mail on arrival; staff can resend it
from the lead board. Every attempt is written to the notification log.
"""

import logging
from typing import Optional

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction

from apps.accounts.models import User
from apps.notifications.models import NotificationLog, NotificationType, NotificationStatus
from apps.schools.models import Lead, LeadSource

logger = logging.getLogger(__name__)

WELCOME_SUBJECT = 'Bem-vindo ao Xpace Control!'


def _welcome_message(lead: Lead) -> str:
    return (
        f"Olá, {lead.school_name}!\n\n"
        "Obrigado pelo seu interesse em conhecer o Xpace Control, a plataforma completa "
        "de gestão para escolas de dança.\n\n"
        "Por que escolher o Xpace?\n"
        "- Controle de presenças via QR Code\n"
        "- Gestão de pagamentos e inadimplência\n"
        "- Comunicação automática com alunos e responsáveis\n"
        "- Relatórios e analytics em tempo real\n"
        "- CRM integrado para captação de novos alunos\n\n"
        f"Sabemos que você está em {lead.city} e queremos ajudar a transformar "
        "a gestão da sua escola!\n\n"
        "Em breve, nossa equipe entrará em contato para agendar uma apresentação personalizada.\n\n"
        "Se você não solicitou este email, pode ignorá-lo com segurança.\n"
    )


def send_welcome_email(lead: Lead, sent_by: Optional[User] = None) -> NotificationLog:
    """E-mail the welcome message to ``lead`` and log the attempt."""
    sent = send_mail(
        subject=WELCOME_SUBJECT,
        message=_welcome_message(lead),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[lead.email],
        fail_silently=True,
    )
    if not sent:
        logger.warning("Welcome e-mail for lead %s could not be delivered", lead.id)

    return NotificationLog.objects.create(
        user=sent_by,
        recipient_email=lead.email,
        notification_type=NotificationType.GENERAL,
        message=f"Email de boas-vindas enviado para {lead.email}",
        status=NotificationStatus.SENT if sent else NotificationStatus.FAILED,
    )


@transaction.atomic
def create_lead(
    *,
    school_name: str,
    city: str,
    whatsapp: str,
    email: str,
    notes: str = '',
    source: str = LeadSource.WEBSITE
) -> Lead:
    """Store a landing page lead and send its welcome e-mail."""
    lead = Lead.objects.create(
        school_name=school_name,
        city=city,
        whatsapp=whatsapp,
        email=email.strip().lower(),
        notes=notes,
        source=source,
    )
    send_welcome_email(lead)
    logger.info("Lead %s captured from %s", lead.id, source)
    return lead

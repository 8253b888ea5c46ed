"""
Event ticketing.

Tickets go reserved -> paid -> used. The HTML ticket carries a QR code
with ``TICKET:<id>`` which the door scanner reads back.
"""

import base64
import logging
import uuid

from django.db import transaction
from django.template.loader import render_to_string
from django.utils import timezone

from apps.attendance.qr import QRCodeRenderer
from .models import Ticket, TicketStatus
from .exceptions import TicketNotFoundError, TicketAlreadyUsedError, InvalidTicketStatusError

logger = logging.getLogger(__name__)

DEFAULT_BRAND_NAME = "Xpace Control"
DEFAULT_BRAND_COLOR = "#6324b2"
TICKET_PREFIX = "TICKET:"


def reserve_ticket(*, event, buyer_name, student=None):
    """Reserve a ticket at the event's current price."""
    return Ticket.objects.create(
        event=event,
        student=student,
        buyer_name=buyer_name,
        amount=event.ticket_price,
        status=TicketStatus.RESERVED,
    )


@transaction.atomic
def mark_ticket_paid(*, ticket_id):
    ticket = Ticket.objects.select_for_update().get(id=ticket_id)
    if ticket.status != TicketStatus.RESERVED:
        raise InvalidTicketStatusError(f"Ticket is already {ticket.status}")
    ticket.status = TicketStatus.PAID
    ticket.save(update_fields=['status', 'updated_at'])
    return ticket


def render_ticket_html(ticket: Ticket) -> str:
    """
    Render the printable ticket.

    Branding falls back to the product name and colour when the school
    has none configured.
    """
    school = ticket.event.school
    context = {
        'ticket': ticket,
        'school_name': school.name or DEFAULT_BRAND_NAME,
        'color': school.primary_color or DEFAULT_BRAND_COLOR,
        'badge': 'PAGO' if ticket.status == TicketStatus.PAID else 'RESERVADO',
        'qr_code': QRCodeRenderer.to_data_url(ticket.qr_payload),
        'generated_at': timezone.localtime(),
        'short_id': str(ticket.id)[:8],
    }
    return render_to_string('events/ticket.html', context)


def generate_ticket(ticket: Ticket) -> dict:
    """HTML ticket encoded as base64 so the client can turn it into a PDF."""
    html = render_ticket_html(ticket)
    return {
        'html': base64.b64encode(html.encode('utf-8')).decode('ascii'),
        'message': "Ticket generated successfully",
    }


def parse_ticket_payload(payload: str) -> str:
    payload = (payload or '').strip()
    if payload.startswith(TICKET_PREFIX):
        return payload[len(TICKET_PREFIX):]
    return payload


@transaction.atomic
def scan_ticket(*, payload, school=None):
    """
    Validate a ticket at the door.

    Args:
        payload: Scanned text, either ``TICKET:<id>`` or the bare id
        school: When given, only tickets of this school's events match

    Returns:
        Ticket: The ticket, now marked used

    Raises:
        TicketNotFoundError: Unknown or malformed id
        TicketAlreadyUsedError: Ticket was scanned before
        InvalidTicketStatusError: Ticket is only reserved
    """
    tickets = Ticket.objects.select_for_update().select_related('event')
    if school is not None:
        tickets = tickets.filter(event__school=school)

    try:
        ticket = tickets.get(id=uuid.UUID(parse_ticket_payload(payload)))
    except (Ticket.DoesNotExist, ValueError):
        raise TicketNotFoundError("Ingresso não encontrado.")

    if ticket.status == TicketStatus.USED:
        raise TicketAlreadyUsedError(f"{ticket.buyer_name} já utilizou este ingresso.")
    if ticket.status != TicketStatus.PAID:
        raise InvalidTicketStatusError(f"Ingresso com status inválido ({ticket.status}).")

    ticket.status = TicketStatus.USED
    ticket.used_at = timezone.now()
    ticket.save(update_fields=['status', 'used_at', 'updated_at'])
    logger.info("Ticket %s admitted for event %s", ticket.id, ticket.event_id)
    return ticket

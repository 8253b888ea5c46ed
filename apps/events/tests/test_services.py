import base64

import pytest
from apps.accounts.models import User
from apps.events.models import Ticket, TicketStatus
from apps.events.services import (
    reserve_ticket,
    mark_ticket_paid,
    render_ticket_html,
    generate_ticket,
    parse_ticket_payload,
    scan_ticket,
)
from apps.events.exceptions import TicketNotFoundError, TicketAlreadyUsedError, InvalidTicketStatusError
from apps.schools.services import create_school


@pytest.mark.django_db
class TestTicketLifecycle:

    def test_reserve_uses_event_price(self, event):
        ticket = reserve_ticket(event=event, buyer_name='João Lima')

        assert ticket.status == TicketStatus.RESERVED
        assert ticket.amount == event.ticket_price

    def test_pay_reserved_ticket(self, reserved_ticket):
        ticket = mark_ticket_paid(ticket_id=reserved_ticket.id)

        assert ticket.status == TicketStatus.PAID

    def test_pay_twice(self, paid_ticket):
        with pytest.raises(InvalidTicketStatusError):
            mark_ticket_paid(ticket_id=paid_ticket.id)


@pytest.mark.django_db
class TestTicketRendering:

    def test_html_contains_branding_and_qr(self, reserved_ticket):
        html = render_ticket_html(reserved_ticket)

        assert 'Studio Ritmo' in html
        assert '#ff0066' in html
        assert 'RESERVADO' in html
        assert 'data:image/png;base64,' in html
        assert str(reserved_ticket.id)[:8] in html

    def test_paid_badge(self, paid_ticket):
        assert 'PAGO' in render_ticket_html(paid_ticket)

    def test_generate_returns_base64(self, paid_ticket):
        result = generate_ticket(paid_ticket)

        html = base64.b64decode(result['html']).decode('utf-8')
        assert 'Maria Souza' in html
        assert result['message'] == 'Ticket generated successfully'


@pytest.mark.django_db
class TestScanTicket:

    def test_payload_prefix(self):
        assert parse_ticket_payload('TICKET:abc') == 'abc'
        assert parse_ticket_payload(' abc ') == 'abc'

    def test_paid_ticket_admitted_once(self, paid_ticket, school):
        ticket = scan_ticket(payload=paid_ticket.qr_payload, school=school)

        assert ticket.status == TicketStatus.USED
        assert ticket.used_at is not None

        with pytest.raises(TicketAlreadyUsedError, match='Maria Souza já utilizou este ingresso.'):
            scan_ticket(payload=paid_ticket.qr_payload, school=school)

    def test_reserved_ticket_rejected(self, reserved_ticket, school):
        with pytest.raises(InvalidTicketStatusError, match=r'Ingresso com status inválido \(reserved\)\.'):
            scan_ticket(payload=str(reserved_ticket.id), school=school)

        reserved_ticket.refresh_from_db()
        assert reserved_ticket.status == TicketStatus.RESERVED

    @pytest.mark.parametrize('payload', ['TICKET:not-a-uuid', 'TICKET:00000000-0000-0000-0000-000000000000', ''])
    def test_unknown_ticket(self, payload, school):
        with pytest.raises(TicketNotFoundError, match='Ingresso não encontrado.'):
            scan_ticket(payload=payload, school=school)

    def test_other_school_cannot_scan(self, paid_ticket):
        owner = User.objects.create_user(email='x@example.com', password='TestPass123!')
        other = create_school(name='Outra', admin=owner)

        with pytest.raises(TicketNotFoundError):
            scan_ticket(payload=paid_ticket.qr_payload, school=other)

        assert Ticket.objects.get(id=paid_ticket.id).status == TicketStatus.PAID

"""
Tests for payments services.

Asaas is never reached: ``requests.post`` is patched where the client
imports it.
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import Mock, patch

import requests

from apps.payments.asaas import AsaasClient
from apps.payments.models import AsaasCustomer, Payment, PaymentStatus, PaymentMethod
from apps.payments.services import AsaasBillingService, PaymentService
from apps.payments.exceptions import (
    AsaasAPIError,
    GatewayConfigurationError,
    ChargeFailedError,
    InvalidWebhookPayloadError,
    PaymentNotFoundError,
    PaymentAlreadyPaidError,
)


def _response(payload, status_code=200):
    return Mock(ok=status_code < 400, status_code=status_code, text=str(payload), json=Mock(return_value=payload))


# =============================================================================
# AsaasClient Tests
# =============================================================================

class TestAsaasClient:

    def test_missing_key(self):
        with pytest.raises(GatewayConfigurationError):
            AsaasClient(api_key='')

    def test_create_payment_payload(self):
        client = AsaasClient(api_key='key', base_url='https://asaas.test/api/v3/')

        with patch('apps.payments.asaas.requests.post') as mock_post:
            mock_post.return_value = _response({'id': 'pay_1'})
            client.create_payment(
                customer_id='cus_1',
                billing_type='PIX',
                value=Decimal('150.00'),
                due_date=date(2025, 3, 10),
                description='Mensalidade',
            )

        args, kwargs = mock_post.call_args
        assert args[0] == 'https://asaas.test/api/v3/payments'
        assert kwargs['headers']['access_token'] == 'key'
        assert kwargs['json'] == {
            'customer': 'cus_1',
            'billingType': 'PIX',
            'value': 150.0,
            'dueDate': '2025-03-10',
            'description': 'Mensalidade',
        }

    def test_error_status_raises(self):
        client = AsaasClient(api_key='key')

        with patch('apps.payments.asaas.requests.post') as mock_post:
            mock_post.return_value = _response({'errors': []}, status_code=400)
            with pytest.raises(AsaasAPIError) as exc_info:
                client.create_customer(name='Ana', email='', cpf_cnpj='')

        assert exc_info.value.status_code == 400
        assert str(exc_info.value) == 'Falha ao criar cliente no Asaas.'

    def test_network_error_raises(self):
        client = AsaasClient(api_key='key')

        with patch('apps.payments.asaas.requests.post', side_effect=requests.ConnectionError('down')):
            with pytest.raises(AsaasAPIError):
                client.create_customer(name='Ana', email='', cpf_cnpj='')


# =============================================================================
# Charge Tests
# =============================================================================

@pytest.mark.django_db
class TestCreateCustomerAndCharge:

    def test_creates_customer_and_pending_payment(self, student):
        with patch('apps.payments.asaas.requests.post') as mock_post:
            mock_post.side_effect = [
                _response({'id': 'cus_abc'}),
                _response({'id': 'pay_xyz', 'invoiceUrl': 'https://asaas.test/i/pay_xyz'}),
            ]
            payment = AsaasBillingService.create_customer_and_charge(
                student=student,
                value=Decimal('180.00'),
                due_date=date(2025, 4, 5),
                cpf_cnpj='12345678909',
                billing_type='BOLETO',
            )

        assert mock_post.call_count == 2
        assert AsaasCustomer.objects.get(student=student).asaas_customer_id == 'cus_abc'
        assert payment.status == PaymentStatus.PENDING
        assert payment.payment_reference == 'pay_xyz'
        assert payment.payment_method == PaymentMethod.BOLETO
        assert payment.reference_month == '2025-04'
        assert payment.boleto_url == 'https://asaas.test/i/pay_xyz'

    def test_reuses_existing_customer(self, student):
        AsaasCustomer.objects.create(student=student, asaas_customer_id='cus_old')

        with patch('apps.payments.asaas.requests.post') as mock_post:
            mock_post.return_value = _response({'id': 'pay_1'})
            AsaasBillingService.create_customer_and_charge(
                student=student, value=Decimal('99.90'), due_date=date(2025, 4, 5),
            )

        assert mock_post.call_count == 1
        assert mock_post.call_args.kwargs['json']['customer'] == 'cus_old'

    def test_gateway_refusal(self, student):
        with patch('apps.payments.asaas.requests.post') as mock_post:
            mock_post.return_value = _response({'errors': []}, status_code=401)
            with pytest.raises(ChargeFailedError, match='Falha ao gerar cobrança na Asaas.'):
                AsaasBillingService.create_customer_and_charge(
                    student=student, value=Decimal('99.90'), due_date=date(2025, 4, 5),
                )

        assert not Payment.objects.exists()

    def test_missing_configuration(self, student, settings):
        settings.ASAAS_API_KEY = ''

        with pytest.raises(GatewayConfigurationError, match='Erro de configuração do servidor'):
            AsaasBillingService.create_customer_and_charge(
                student=student, value=Decimal('99.90'), due_date=date(2025, 4, 5),
            )


# =============================================================================
# Webhook Tests
# =============================================================================

@pytest.mark.django_db
class TestProcessWebhook:

    @pytest.mark.parametrize('event', ['PAYMENT_RECEIVED', 'PAYMENT_CONFIRMED'])
    def test_paid_events(self, pending_payment, event):
        result = AsaasBillingService.process_webhook(
            {'event': event, 'payment': {'id': 'pay_123'}}, today=date(2025, 3, 9),
        )

        pending_payment.refresh_from_db()
        assert pending_payment.status == PaymentStatus.PAID
        assert pending_payment.paid_date == date(2025, 3, 9)
        assert result == {'success': True, 'paymentId': pending_payment.id, 'newStatus': 'paid'}

    @pytest.mark.parametrize('event,expected', [
        ('PAYMENT_OVERDUE', PaymentStatus.OVERDUE),
        ('PAYMENT_DELETED', PaymentStatus.CANCELLED),
        ('PAYMENT_UPDATED', PaymentStatus.PENDING),
    ])
    def test_other_events(self, pending_payment, event, expected):
        AsaasBillingService.process_webhook({'event': event, 'payment': {'id': 'pay_123'}})

        pending_payment.refresh_from_db()
        assert pending_payment.status == expected
        assert pending_payment.paid_date is None

    def test_missing_fields(self, db):
        with pytest.raises(InvalidWebhookPayloadError, match='Invalid payload'):
            AsaasBillingService.process_webhook({'event': 'PAYMENT_RECEIVED'})

    def test_unknown_payment(self, db):
        with pytest.raises(PaymentNotFoundError, match='Payment not found'):
            AsaasBillingService.process_webhook({'event': 'PAYMENT_RECEIVED', 'payment': {'id': 'pay_nope'}})


# =============================================================================
# Manual Settlement Tests
# =============================================================================

@pytest.mark.django_db
class TestPaymentService:

    def test_mark_paid(self, pending_payment):
        payment = PaymentService.mark_paid(
            payment_id=pending_payment.id,
            paid_date=date(2025, 3, 11),
            payment_method=PaymentMethod.PIX,
        )

        assert payment.status == PaymentStatus.PAID
        assert payment.paid_date == date(2025, 3, 11)
        assert payment.payment_method == PaymentMethod.PIX

    def test_mark_paid_twice(self, pending_payment):
        PaymentService.mark_paid(payment_id=pending_payment.id)

        with pytest.raises(PaymentAlreadyPaidError):
            PaymentService.mark_paid(payment_id=pending_payment.id)

    def test_outstanding_total(self, student, pending_payment):
        Payment.objects.create(
            student=student, amount=Decimal('50.00'), due_date=date(2025, 2, 10),
            status=PaymentStatus.OVERDUE, reference_month='2025-02',
        )
        Payment.objects.create(
            student=student, amount=Decimal('70.00'), due_date=date(2025, 1, 10),
            status=PaymentStatus.PAID, reference_month='2025-01',
        )

        outstanding = PaymentService.outstanding_for_student(student)

        assert outstanding['total_outstanding'] == Decimal('200.00')
        assert [p.reference_month for p in outstanding['payments']] == ['2025-02', '2025-03']

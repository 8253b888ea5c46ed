"""
Payment Services Module
=======================

Billing for dance schools: Asaas charges, webhook reconciliation,
manual settlement and teacher commissions.

Classes:
    AsaasBillingService: Creates customers/charges and applies webhook events.
    PaymentService: Manual settlement and outstanding balances.
    CommissionService: Teacher commission settlement.
"""

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from .asaas import AsaasClient
from .models import Payment, PaymentStatus, PaymentMethod, AsaasCustomer, CommissionStatus
from .exceptions import (
    AsaasAPIError,
    GatewayConfigurationError,
    ChargeFailedError,
    InvalidWebhookPayloadError,
    PaymentNotFoundError,
    PaymentAlreadyPaidError,
)

logger = logging.getLogger(__name__)

BILLING_TYPE_METHODS = {
    'BOLETO': PaymentMethod.BOLETO,
    'PIX': PaymentMethod.PIX,
    'CREDIT_CARD': PaymentMethod.CREDIT_CARD,
}

WEBHOOK_STATUS_MAP = {
    'PAYMENT_RECEIVED': PaymentStatus.PAID,
    'PAYMENT_CONFIRMED': PaymentStatus.PAID,
    'PAYMENT_OVERDUE': PaymentStatus.OVERDUE,
    'PAYMENT_DELETED': PaymentStatus.CANCELLED,
}


class AsaasBillingService:
    """
    Asaas integration.

    Methods:
        create_customer_and_charge: Ensure a customer exists, then charge it.
        process_webhook: Apply an Asaas payment event to the stored Payment.
    """

    @staticmethod
    def create_customer_and_charge(
        *,
        student,
        value,
        due_date,
        cpf_cnpj='',
        billing_type='PIX',
        description='',
        client=None,
    ):
        """
        Create (or reuse) the student's Asaas customer and issue a charge.

        Args:
            student (Student): Student being billed.
            value (Decimal): Charge amount in BRL.
            due_date (date): Charge due date.
            cpf_cnpj (str): Payer document, required for a new customer.
            billing_type (str): BOLETO, PIX or CREDIT_CARD.
            description (str): Text shown on the charge.
            client (AsaasClient, optional): Injected client, mainly for tests.

        Returns:
            Payment: The pending payment linked to the Asaas charge.

        Raises:
            GatewayConfigurationError: If the API key is missing.
            ChargeFailedError: If Asaas refuses or cannot be reached.
        """
        try:
            client = client or AsaasClient()
        except GatewayConfigurationError:
            logger.error("Asaas charge requested but ASAAS_API_KEY is empty")
            raise GatewayConfigurationError(
                "Erro de configuração do servidor. Contate o administrador."
            )

        try:
            customer = AsaasCustomer.objects.filter(student=student).first()
            if customer is None:
                customer_id = client.create_customer(
                    name=student.full_name,
                    email=student.email,
                    cpf_cnpj=cpf_cnpj,
                )
                customer = AsaasCustomer.objects.create(student=student, asaas_customer_id=customer_id)

            charge = client.create_payment(
                customer_id=customer.asaas_customer_id,
                billing_type=billing_type,
                value=value,
                due_date=due_date,
                description=description,
            )
        except AsaasAPIError as exc:
            logger.error("Charge for student %s failed: %s", student.id, exc)
            raise ChargeFailedError("Falha ao gerar cobrança na Asaas.") from exc

        payment = Payment.objects.create(
            student=student,
            amount=Decimal(str(value)),
            due_date=due_date,
            status=PaymentStatus.PENDING,
            payment_method=BILLING_TYPE_METHODS.get(billing_type, ''),
            reference_month=due_date.strftime('%Y-%m'),
            payment_reference=charge.get('id', ''),
            boleto_url=charge.get('bankSlipUrl') or charge.get('invoiceUrl') or '',
            notes=description,
        )
        logger.info("Created Asaas charge %s for student %s", payment.payment_reference, student.id)
        return payment

    @staticmethod
    @transaction.atomic
    def process_webhook(payload, today=None):
        """
        Apply an Asaas event.

        Events other than received/confirmed/overdue/deleted leave the
        status unchanged.

        Returns:
            dict: {'success': True, 'paymentId': ..., 'newStatus': ...}

        Raises:
            InvalidWebhookPayloadError: If event or payment is missing.
            PaymentNotFoundError: If no Payment has that Asaas id.
        """
        event = (payload or {}).get('event')
        gateway_payment = (payload or {}).get('payment')
        if not event or not gateway_payment:
            raise InvalidWebhookPayloadError("Invalid payload")

        reference = gateway_payment.get('id') if isinstance(gateway_payment, dict) else None
        payment = (
            Payment.objects.select_for_update().filter(payment_reference=reference).first()
            if reference else None
        )
        if payment is None:
            logger.warning("Asaas webhook for unknown payment reference %s", reference)
            raise PaymentNotFoundError("Payment not found")

        new_status = WEBHOOK_STATUS_MAP.get(event)
        if new_status is None:
            logger.info("Unhandled Asaas event %s for payment %s", event, payment.id)
        else:
            payment.status = new_status
            if new_status == PaymentStatus.PAID:
                payment.paid_date = today or timezone.localdate()
            payment.save(update_fields=['status', 'paid_date', 'updated_at'])
            logger.info("Payment %s updated to status %s", payment.id, new_status)

        return {'success': True, 'paymentId': payment.id, 'newStatus': payment.status}


class PaymentService:
    """Manual settlement and balances."""

    @staticmethod
    @transaction.atomic
    def mark_paid(*, payment_id, paid_date=None, payment_method=None):
        """
        Settle a payment outside the gateway (cash, transfer).

        Raises:
            Payment.DoesNotExist: If payment doesn't exist.
            PaymentAlreadyPaidError: If it was already paid.
        """
        payment = Payment.objects.select_for_update().get(id=payment_id)
        if payment.status == PaymentStatus.PAID:
            raise PaymentAlreadyPaidError("Payment is already marked as paid.")

        payment.status = PaymentStatus.PAID
        payment.paid_date = paid_date or timezone.localdate()
        if payment_method:
            payment.payment_method = payment_method
        payment.save(update_fields=['status', 'paid_date', 'payment_method', 'updated_at'])
        return payment

    @staticmethod
    def outstanding_for_student(student):
        """Pending and overdue charges with their total."""
        payments = student.payments.filter(
            status__in=[PaymentStatus.PENDING, PaymentStatus.OVERDUE]
        ).order_by('due_date')
        total = payments.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')
        return {
            'student_id': student.id,
            'total_outstanding': total,
            'payments': list(payments),
        }


class CommissionService:

    @staticmethod
    @transaction.atomic
    def mark_paid(*, commission, payment_date=None):
        if commission.status == CommissionStatus.PAID:
            raise PaymentAlreadyPaidError("Commission is already marked as paid.")
        commission.status = CommissionStatus.PAID
        commission.payment_date = payment_date or timezone.localdate()
        commission.save(update_fields=['status', 'payment_date', 'updated_at'])
        return commission

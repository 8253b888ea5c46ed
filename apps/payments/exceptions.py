"""
Domain exceptions for payments app.

Gateway errors keep the technical detail in the log; what reaches the
client is the generic message.
"""


class PaymentServiceError(Exception):
    """Base exception for payment service errors."""
    pass


class GatewayConfigurationError(PaymentServiceError):
    """Raised when the Asaas API key is not configured."""
    pass


class AsaasAPIError(PaymentServiceError):
    """Raised when Asaas rejects a request or cannot be reached."""

    def __init__(self, message, status_code=None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ChargeFailedError(PaymentServiceError):
    """Raised when a charge could not be created at the gateway."""
    pass


class InvalidWebhookPayloadError(PaymentServiceError):
    """Raised when the webhook body lacks event or payment."""
    pass


class PaymentNotFoundError(PaymentServiceError):
    """Raised when a webhook references an unknown payment."""
    pass


class PaymentAlreadyPaidError(PaymentServiceError):
    """Raised when marking an already settled payment as paid."""
    pass


class WebhookAuthenticationError(PaymentServiceError):
    """Raised when the webhook shared secret does not match."""
    pass

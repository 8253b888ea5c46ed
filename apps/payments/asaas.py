"""
Thin client for the Asaas REST API.

Only the two calls the school needs are wrapped: creating a customer and
creating a charge for that customer.
"""

import logging

import requests
from django.conf import settings

from .exceptions import AsaasAPIError, GatewayConfigurationError

logger = logging.getLogger(__name__)


class AsaasClient:
    """
    Asaas v3 client authenticated with the ``access_token`` header.

    Example:
        client = AsaasClient()
        customer_id = client.create_customer(name='Ana', email='ana@x.com', cpf_cnpj='12345678909')
        charge = client.create_payment(customer_id=customer_id, billing_type='PIX', ...)
    """

    def __init__(self, api_key=None, base_url=None, timeout=None):
        self.api_key = api_key if api_key is not None else settings.ASAAS_API_KEY
        self.base_url = (base_url or settings.ASAAS_API_URL).rstrip('/')
        self.timeout = timeout or settings.EXTERNAL_HTTP_TIMEOUT
        if not self.api_key:
            raise GatewayConfigurationError("ASAAS_API_KEY is not configured")

    def _post(self, path, payload, error_message):
        try:
            response = requests.post(
                f"{self.base_url}{path}",
                json=payload,
                headers={
                    'Content-Type': 'application/json',
                    'access_token': self.api_key,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Asaas request to %s failed: %s", path, exc)
            raise AsaasAPIError(error_message) from exc

        if not response.ok:
            logger.error("Asaas %s returned %s: %s", path, response.status_code, response.text)
            raise AsaasAPIError(error_message, status_code=response.status_code, body=response.text)

        return response.json()

    def create_customer(self, *, name, email, cpf_cnpj):
        """Create a customer and return its Asaas id."""
        data = self._post(
            '/customers',
            {'name': name, 'email': email, 'cpfCnpj': cpf_cnpj},
            "Falha ao criar cliente no Asaas.",
        )
        return data['id']

    def create_payment(self, *, customer_id, billing_type, value, due_date, description=''):
        """Create a charge and return the raw Asaas payment object."""
        return self._post(
            '/payments',
            {
                'customer': customer_id,
                'billingType': billing_type,
                'value': float(value),
                'dueDate': due_date.isoformat(),
                'description': description,
            },
            "Falha ao criar cobrança no Asaas.",
        )

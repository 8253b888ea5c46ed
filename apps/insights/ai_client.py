"""
Client for the OpenAI-compatible chat completion gateway.
"""

import logging

import requests
from django.conf import settings

from .exceptions import (
    AIGatewayError,
    AIGatewayNotConfiguredError,
    AIRateLimitError,
    AICreditsExhaustedError,
)

logger = logging.getLogger(__name__)


class AIGatewayClient:
    """
    Send a chat conversation and return the assistant's reply.

    Example:
        client = AIGatewayClient()
        text = client.complete([
            {'role': 'system', 'content': 'Você é ...'},
            {'role': 'user', 'content': 'Analise ...'},
        ])
    """

    def __init__(self, api_key=None, url=None, model=None, timeout=None):
        self.api_key = api_key if api_key is not None else settings.AI_GATEWAY_API_KEY
        self.url = url or settings.AI_GATEWAY_URL
        self.model = model or settings.AI_MODEL
        self.timeout = timeout or settings.EXTERNAL_HTTP_TIMEOUT
        if not self.api_key:
            raise AIGatewayNotConfiguredError("AI_GATEWAY_API_KEY is not configured")

    def complete(self, messages, **options):
        payload = {'model': self.model, 'messages': messages}
        payload.update(options)

        try:
            response = requests.post(
                self.url,
                json=payload,
                headers={
                    'Authorization': f'Bearer {self.api_key}',
                    'Content-Type': 'application/json',
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("AI gateway unreachable: %s", exc)
            raise AIGatewayError("AI analysis failed") from exc

        if response.status_code == 429:
            logger.warning("AI gateway rate limit hit")
            raise AIRateLimitError("Limite de requisições atingido. Tente novamente mais tarde.")
        if response.status_code == 402:
            logger.warning("AI gateway credits exhausted")
            raise AICreditsExhaustedError("Créditos insuficientes. Adicione créditos ao seu workspace.")
        if not response.ok:
            logger.error("AI gateway error %s: %s", response.status_code, response.text)
            raise AIGatewayError("AI analysis failed")

        try:
            data = response.json()
            return data['choices'][0]['message']['content'] or ''
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            logger.error("AI gateway returned an unexpected body: %s", response.text)
            raise AIGatewayError("AI analysis failed") from exc

"""
Collection messages for overdue fees.

The AI writes three tones of the same reminder. When no gateway is
configured the fixed templates below are used instead.
"""

import json
import logging
import re

from ..ai_client import AIGatewayClient
from ..exceptions import AIGatewayError, AIGatewayNotConfiguredError
from .formatting import format_brl, format_day_month

logger = logging.getLogger(__name__)

TONES = ('formal', 'friendly', 'urgent')

BILLING_SYSTEM_PROMPT = (
    "Você é um assistente de cobrança de uma escola de dança. Escreva mensagens "
    "empáticas e respeitosas em português do Brasil. Responda apenas com JSON."
)

_JSON_FENCE = re.compile(r'^```(?:json)?\s*|\s*```$')


def template_messages(student_name, debt_amount, due_date):
    amount = format_brl(debt_amount)
    date = format_day_month(due_date)
    return {
        'formal': (
            f"Prezado(a) responsável por {student_name},\n\n"
            f"Escrevemos para notificá-lo(a) sobre um saldo pendente de {amount}, "
            f"referente à mensalidade com vencimento em {date}.\n\n"
            "Para regularizar a situação, por favor, realize o pagamento através dos nossos "
            "canais habituais. Se o pagamento já foi efetuado, por favor, desconsidere este aviso.\n\n"
            "Atenciosamente,\nA Direção."
        ),
        'friendly': (
            f"Olá, família de {student_name}! Tudo bem? 😊\n\n"
            f"Só passando para lembrar com carinho sobre a mensalidade de {amount}, "
            f"que venceu no dia {date}. Às vezes, na correria do dia a dia, a gente acaba esquecendo, né?\n\n"
            "Qualquer dúvida ou se precisar de ajuda, é só chamar! 😉\n\nUm abraço!"
        ),
        'urgent': (
            "ATENÇÃO: Pendência Financeira Urgente\n\n"
            f"Prezado responsável por {student_name},\n\n"
            f"Identificamos que o pagamento de {amount}, com vencimento em {date}, "
            "ainda não foi registrado em nosso sistema.\n\n"
            "A regularização é necessária para garantir a continuidade dos serviços e evitar bloqueios.\n\n"
            "Por favor, efetue o pagamento imediatamente. Caso tenha alguma dificuldade, "
            "entre em contato conosco com urgência."
        ),
    }


def _billing_prompt(student_name, debt_amount, due_date):
    return (
        f"Aluno: {student_name}\n"
        f"Valor em aberto: {format_brl(debt_amount)}\n"
        f"Vencimento: {format_day_month(due_date)}\n\n"
        "Escreva três mensagens de cobrança para o responsável: uma formal, uma amigável "
        "e uma urgente. Responda com um objeto JSON com as chaves \"formal\", \"friendly\" e \"urgent\"."
    )


def parse_messages(content):
    """Extract the three tones from the model's JSON answer."""
    try:
        data = json.loads(_JSON_FENCE.sub('', content.strip()))
    except ValueError as exc:
        raise AIGatewayError("AI returned invalid JSON") from exc
    if not isinstance(data, dict) or not all(isinstance(data.get(t), str) for t in TONES):
        raise AIGatewayError("AI response is missing message tones")
    return {t: data[t] for t in TONES}


def generate_billing_messages(*, student_name, debt_amount, due_date, client=None):
    """
    Formal, friendly and urgent reminders for one overdue fee.

    Rate-limit and credit errors propagate so the caller can report them.
    A malformed AI answer falls back to the templates.

    Returns:
        dict: {'formal': str, 'friendly': str, 'urgent': str}
    """
    try:
        client = client or AIGatewayClient()
    except AIGatewayNotConfiguredError:
        logger.info("AI gateway not configured, using billing templates")
        return template_messages(student_name, debt_amount, due_date)

    content = client.complete([
        {'role': 'system', 'content': BILLING_SYSTEM_PROMPT},
        {'role': 'user', 'content': _billing_prompt(student_name, debt_amount, due_date)},
    ])

    try:
        return parse_messages(content)
    except AIGatewayError as exc:
        logger.warning("Billing messages fell back to templates: %s", exc)
        return template_messages(student_name, debt_amount, due_date)

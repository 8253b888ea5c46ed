import json
import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import Mock
from django.test import override_settings
from apps.payments.models import Payment, PaymentStatus
from apps.insights.services import (
    generate_billing_messages,
    template_messages,
    export_report,
    report_filename,
    dashboard_stats,
    AIRateLimitError,
    InvalidReportTypeError,
)
from apps.insights.services.billing_messages import parse_messages


TODAY = date(2025, 3, 12)


AI_MESSAGES = {
    'formal': 'Prezado responsável...',
    'friendly': 'Oi, família!',
    'urgent': 'ATENÇÃO',
}


# =============================================================================
# BILLING MESSAGES
# =============================================================================

class TestTemplateMessages:

    def test_tones_include_amount_and_date(self):
        messages = template_messages('Ana Souza', Decimal('1234.5'), date(2025, 3, 5))

        assert set(messages) == {'formal', 'friendly', 'urgent'}
        for text in messages.values():
            assert 'Ana Souza' in text
            assert 'R$ 1.234,50' in text
            assert '05 de março' in text
        assert messages['urgent'].startswith('ATENÇÃO')


class TestParseMessages:

    def test_plain_json(self):
        assert parse_messages(json.dumps(AI_MESSAGES)) == AI_MESSAGES

    def test_fenced_json(self):
        content = "```json\n" + json.dumps(AI_MESSAGES) + "\n```"
        assert parse_messages(content) == AI_MESSAGES


@pytest.mark.django_db
class TestGenerateBillingMessages:

    ARGS = dict(student_name='Ana Souza', debt_amount=Decimal('150.00'), due_date=date(2025, 3, 10))

    @override_settings(AI_GATEWAY_API_KEY='')
    def test_templates_without_gateway(self):
        assert generate_billing_messages(**self.ARGS) == template_messages(
            'Ana Souza', Decimal('150.00'), date(2025, 3, 10)
        )

    def test_ai_answer_used(self):
        client = Mock(complete=Mock(return_value=json.dumps(AI_MESSAGES)))

        assert generate_billing_messages(client=client, **self.ARGS) == AI_MESSAGES
        prompt = client.complete.call_args.args[0][1]['content']
        assert 'R$ 150,00' in prompt
        assert '10 de março' in prompt

    @pytest.mark.parametrize('answer', ['not json', '{"formal": "só uma"}', '[]'])
    def test_malformed_answer_falls_back(self, answer):
        client = Mock(complete=Mock(return_value=answer))

        messages = generate_billing_messages(client=client, **self.ARGS)

        assert messages['friendly'].startswith('Olá, família de Ana Souza!')

    def test_rate_limit_propagates(self):
        client = Mock(complete=Mock(side_effect=AIRateLimitError('Limite')))

        with pytest.raises(AIRateLimitError):
            generate_billing_messages(client=client, **self.ARGS)


# =============================================================================
# REPORTS
# =============================================================================

@pytest.mark.django_db
class TestExportReport:

    def test_payments_csv(self, make_student):
        student = make_student('Ana Souza')
        Payment.objects.create(
            student=student, amount=Decimal('150.00'), due_date=date(2025, 3, 10),
            paid_date=date(2025, 3, 11), status=PaymentStatus.PAID, reference_month='2025-03',
        )
        Payment.objects.create(
            student=student, amount=Decimal('150.00'), due_date=date(2025, 2, 10),
            status=PaymentStatus.OVERDUE, reference_month='2025-02',
        )

        lines = export_report(student.school, 'payments').splitlines()

        assert lines == [
            'Aluno,Valor,Vencimento,Data Pagamento,Status,Mês Referência',
            'Ana Souza,R$ 150.00,10/03/2025,11/03/2025,Pago,março de 2025',
            'Ana Souza,R$ 150.00,10/02/2025,-,Atrasado,fevereiro de 2025',
        ]

    def test_attendances_csv(self, make_student, attend, school):
        attend(make_student('Ana Souza'), 1)

        lines = export_report(school, 'attendances').splitlines()

        assert lines[0] == 'Data,Aluno,Turma,Horário de Registro'
        assert lines[1].startswith('12/03/2025,Ana Souza,Ballet Adulto,')

    def test_other_schools_excluded(self, school, other_school_student):
        assert export_report(school, 'payments').splitlines()[1:] == []

    def test_unknown_type(self, school):
        with pytest.raises(InvalidReportTypeError):
            export_report(school, 'grades')

    def test_filename(self, school):
        assert report_filename(school, 'payments', today=TODAY) == 'relatorio_payments_Studio_Ritmo_2025-03-12.csv'


@pytest.mark.django_db
class TestDashboardStats:

    def test_figures(self, make_student, attend, dance_class, school):
        student = make_student('Ana Souza')
        make_student('Ex Aluno', active=False)
        # Wednesday: Mon 10th to today counts, Sunday 9th does not
        attend(student, 4)
        Payment.objects.create(
            student=student, amount=Decimal('100.00'), due_date=date(2025, 3, 5),
            paid_date=date(2025, 3, 5), status=PaymentStatus.PAID,
        )
        Payment.objects.create(
            student=student, amount=Decimal('90.00'), due_date=date(2025, 2, 5),
            paid_date=date(2025, 2, 28), status=PaymentStatus.PAID,
        )
        Payment.objects.create(
            student=student, amount=Decimal('150.00'), due_date=date(2025, 3, 20),
        )
        Payment.objects.create(
            student=student, amount=Decimal('50.00'), due_date=date(2025, 2, 20),
            status=PaymentStatus.OVERDUE,
        )

        stats = dashboard_stats(school, today=TODAY)

        assert stats == {
            'total_students': 1,
            'active_classes': 1,
            'monthly_revenue': Decimal('100.00'),
            'pending_payments': 2,
            'pending_amount': Decimal('200.00'),
            'attendance_this_week': 3,
        }

    def test_empty_school(self, school):
        stats = dashboard_stats(school, today=TODAY)
        assert stats['monthly_revenue'] == Decimal('0.00')
        assert stats['pending_amount'] == Decimal('0.00')
        assert stats['attendance_this_week'] == 0

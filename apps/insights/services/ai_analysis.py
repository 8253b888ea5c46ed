"""
Churn risk and attendance analysis.

The scores are computed locally; the AI gateway only writes the
narrative suggestions on top of them.
"""

import logging
import math
from datetime import timedelta

from django.db.models import Count, Q
from django.utils import timezone

from apps.attendance.models import Attendance
from apps.payments.models import Payment, PaymentStatus
from ..ai_client import AIGatewayClient
from ..exceptions import AIGatewayError
from .formatting import months_ago

logger = logging.getLogger(__name__)

CHURN_WINDOW_DAYS = 28
CHURN_EXPECTED_CLASSES = 12
LATE_PAYMENT_WINDOW_MONTHS = 6
ATTENDANCE_WEIGHT = 0.6
PAYMENT_WEIGHT = 0.4
AT_RISK_THRESHOLD = 40
HIGH_RISK_THRESHOLD = 60

ANALYSIS_WINDOW_DAYS = 30
LOW_ATTENDANCE_THRESHOLD = 60
SEVERE_ATTENDANCE_THRESHOLD = 40

CHURN_SYSTEM_PROMPT = (
    "Você é um consultor especializado em retenção de alunos em escolas de dança. "
    "Forneça sugestões práticas e específicas."
)
ATTENDANCE_SYSTEM_PROMPT = (
    "Você é um assistente de análise educacional. "
    "Analise dados de presença e forneça insights acionáveis em português."
)


def round_half_up(value):
    return int(math.floor(value + 0.5))


def risk_score(attendance_rate, late_payment_count):
    """
    Weighted churn score, 0 for a perfect student.

    Attendance weighs 60%, late payments 40% (saturating at 3).
    """
    late_score = min(late_payment_count / 3, 1) * 100
    return (100 - attendance_rate) * ATTENDANCE_WEIGHT + late_score * PAYMENT_WEIGHT


def risk_level(score):
    if score > HIGH_RISK_THRESHOLD:
        return 'high'
    if score > AT_RISK_THRESHOLD:
        return 'medium'
    return 'low'


def _late_payment_counts(students, today):
    """Late payments per student over the last six months, by due date."""
    since = months_ago(today, LATE_PAYMENT_WINDOW_MONTHS)
    unpaid_late = Q(status__in=[PaymentStatus.PENDING, PaymentStatus.OVERDUE], due_date__lt=today)
    paid_late = Q(status=PaymentStatus.PAID, paid_date__isnull=False)

    counts = {}
    payments = Payment.objects.filter(student__in=students, due_date__gte=since).filter(unpaid_late | paid_late)
    for payment in payments.only('student_id', 'status', 'due_date', 'paid_date'):
        if payment.status == PaymentStatus.PAID and payment.paid_date <= payment.due_date:
            continue
        counts[payment.student_id] = counts.get(payment.student_id, 0) + 1
    return counts


def compute_churn_risk(school, today=None):
    """
    Score every active student of ``school``.

    Returns:
        list[dict]: All students, each with riskScore, riskLevel,
        attendanceRate, attendanceCount and latePaymentCount
    """
    today = today or timezone.localdate()
    students = list(school.students.filter(active=True).order_by('full_name'))

    attendance_counts = dict(
        Attendance.objects.filter(
            student__in=students,
            attendance_date__gte=today - timedelta(days=CHURN_WINDOW_DAYS),
        )
        .values_list('student_id')
        .annotate(total=Count('id'))
    )
    late_counts = _late_payment_counts(students, today)

    results = []
    for student in students:
        attended = attendance_counts.get(student.id, 0)
        late = late_counts.get(student.id, 0)
        # Rate can exceed 100 when a student takes more than 3 classes a week
        rate = attended / CHURN_EXPECTED_CLASSES * 100
        score = risk_score(rate, late)
        results.append({
            'studentId': student.id,
            'name': student.full_name,
            'email': student.email,
            'phone': student.phone,
            'riskScore': round_half_up(score),
            'attendanceRate': round_half_up(rate),
            'attendanceCount': attended,
            'latePaymentCount': late,
            'riskLevel': risk_level(score),
        })
    return results


def _churn_prompt(top_risks):
    lines = ["Analise os seguintes alunos em risco de evasão e sugira ações específicas para cada um:", ""]
    for i, s in enumerate(top_risks, start=1):
        lines.extend([
            f"{i}. {s['name']}",
            f"   - Score de risco: {s['riskScore']}/100",
            f"   - Taxa de presença (últimas 4 semanas): {s['attendanceRate']}%",
            f"   - Pagamentos atrasados (últimos 6 meses): {s['latePaymentCount']}",
            "",
        ])
    lines.extend([
        "Para cada aluno, forneça:",
        "1. Diagnóstico breve do risco",
        "2. Ação imediata sugerida (específica e prática)",
        "3. Estratégia de médio prazo",
        "",
        "Seja objetivo e focado em ações concretas.",
    ])
    return "\n".join(lines)


def analyze_churn_risk(school, today=None, client=None):
    """
    At-risk students plus AI retention suggestions for the top five.

    A failing gateway leaves ``aiSuggestions`` empty instead of failing
    the whole analysis.
    """
    scored = compute_churn_risk(school, today=today)
    if not scored:
        return {'atRiskStudents': [], 'message': "Nenhum aluno encontrado"}

    at_risk = sorted(
        (s for s in scored if s['riskScore'] > AT_RISK_THRESHOLD),
        key=lambda s: s['riskScore'],
        reverse=True,
    )

    suggestions = ''
    if at_risk:
        try:
            suggestions = (client or AIGatewayClient()).complete([
                {'role': 'system', 'content': CHURN_SYSTEM_PROMPT},
                {'role': 'user', 'content': _churn_prompt(at_risk[:5])},
            ])
        except AIGatewayError as exc:
            logger.warning("Churn suggestions unavailable for school %s: %s", school.id, exc)

    return {
        'atRiskStudents': at_risk,
        'totalAtRisk': len(at_risk),
        'aiSuggestions': suggestions,
        'stats': {
            'totalStudents': len(scored),
            'highRisk': sum(1 for s in at_risk if s['riskLevel'] == 'high'),
            'mediumRisk': sum(1 for s in at_risk if s['riskLevel'] == 'medium'),
        },
    }


def attendance_stats(school, today=None):
    """Per-student attendance over the last 30 days."""
    today = today or timezone.localdate()
    students = school.students.filter(active=True).order_by('full_name').annotate(
        attendance_count=Count(
            'attendances',
            filter=Q(attendances__attendance_date__gte=today - timedelta(days=ANALYSIS_WINDOW_DAYS)),
        )
    )
    return [
        {
            'name': s.full_name,
            'email': s.email,
            'attendanceRate': round_half_up(s.attendance_count / ANALYSIS_WINDOW_DAYS * 100),
            'attendanceCount': s.attendance_count,
        }
        for s in students
    ]


def _attendance_prompt(summary):
    lines = [
        "Analise os seguintes dados de presença dos últimos 30 dias:",
        "",
        f"Total de alunos: {summary['totalStudents']}",
        f"Taxa média de presença: {summary['averageAttendanceRate']}%",
        f"Alunos com presença abaixo de 60%: {summary['studentsWithLowAttendance']}",
    ]
    if summary['lowPerformers']:
        lines.append("Alunos com baixa frequência:")
        lines.extend(summary['lowPerformers'])
    lines.extend(["", "Forneça 3-5 alertas ou sugestões específicas para melhorar a frequência. Seja objetivo e prático."])
    return "\n".join(lines)


def analyze_attendance(school, today=None, client=None):
    """
    Low-attendance alerts with an AI written analysis.

    Unlike churn suggestions the AI text is the point of this call, so
    gateway errors propagate.

    Raises:
        AIRateLimitError, AICreditsExhaustedError, AIGatewayError
    """
    stats = attendance_stats(school, today=today)
    if not stats:
        return {'alerts': [], 'message': "Nenhum aluno encontrado"}

    low = [s for s in stats if s['attendanceRate'] < LOW_ATTENDANCE_THRESHOLD]
    summary = {
        'totalStudents': len(stats),
        'studentsWithLowAttendance': len(low),
        'averageAttendanceRate': round_half_up(sum(s['attendanceRate'] for s in stats) / len(stats)),
        'lowPerformers': [f"{s['name']}: {s['attendanceRate']}%" for s in low][:5],
    }

    analysis = (client or AIGatewayClient()).complete([
        {'role': 'system', 'content': ATTENDANCE_SYSTEM_PROMPT},
        {'role': 'user', 'content': _attendance_prompt(summary)},
    ]) or "Nenhuma análise disponível"

    alerts = [
        {
            'type': 'low_attendance',
            'student': s['name'],
            'email': s['email'],
            'message': (
                f"{s['name']} tem taxa de presença de apenas {s['attendanceRate']}% "
                f"({s['attendanceCount']} presenças nos últimos 30 dias)"
            ),
            'severity': 'high' if s['attendanceRate'] < SEVERE_ATTENDANCE_THRESHOLD else 'medium',
        }
        for s in low
    ]

    return {'alerts': alerts, 'aiAnalysis': analysis, 'stats': summary}

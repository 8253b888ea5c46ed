"""
CSV exports and dashboard figures.
"""

import csv
import io
import re
from datetime import timedelta
from decimal import Decimal

from django.db.models import Count, Sum
from django.utils import timezone

from apps.attendance.models import Attendance
from apps.payments.models import Payment, PaymentStatus
from ..exceptions import InvalidReportTypeError
from .formatting import format_date, format_reference_month

REPORT_TYPES = ('attendances', 'payments')

ATTENDANCE_HEADERS = ['Data', 'Aluno', 'Turma', 'Horário de Registro']
PAYMENT_HEADERS = ['Aluno', 'Valor', 'Vencimento', 'Data Pagamento', 'Status', 'Mês Referência']

PAYMENT_STATUS_LABELS = {
    PaymentStatus.PAID: 'Pago',
    PaymentStatus.PENDING: 'Pendente',
}


def _attendance_rows(school):
    attendances = (
        Attendance.objects
        .filter(dance_class__school=school)
        .select_related('student', 'dance_class')
        .order_by('-attendance_date', '-marked_at')
    )
    for att in attendances:
        yield [
            format_date(att.attendance_date),
            att.student.full_name,
            att.dance_class.name,
            timezone.localtime(att.marked_at).strftime('%H:%M:%S'),
        ]


def _payment_rows(school):
    payments = (
        Payment.objects
        .filter(student__school=school)
        .select_related('student')
        .order_by('-due_date')
    )
    for pay in payments:
        yield [
            pay.student.full_name,
            f"R$ {pay.amount:.2f}",
            format_date(pay.due_date),
            format_date(pay.paid_date) if pay.paid_date else '-',
            # Everything that is neither paid nor pending reads as late
            PAYMENT_STATUS_LABELS.get(pay.status, 'Atrasado'),
            format_reference_month(pay.reference_month),
        ]


def report_filename(school, report_type, today=None):
    today = today or timezone.localdate()
    school_name = re.sub(r'\s', '_', school.name)
    return f"relatorio_{report_type}_{school_name}_{today.isoformat()}.csv"


def export_report(school, report_type):
    """
    Render a school report as CSV text.

    Raises:
        InvalidReportTypeError: report_type is not attendances or payments
    """
    if report_type == 'attendances':
        headers, rows = ATTENDANCE_HEADERS, _attendance_rows(school)
    elif report_type == 'payments':
        headers, rows = PAYMENT_HEADERS, _payment_rows(school)
    else:
        raise InvalidReportTypeError(f"Invalid report type: {report_type}")

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


def dashboard_stats(school, today=None):
    """Headline numbers for the admin dashboard."""
    today = today or timezone.localdate()
    month_start = today.replace(day=1)
    week_start = today - timedelta(days=today.weekday())

    payments = Payment.objects.filter(student__school=school)
    outstanding = payments.filter(
        status__in=[PaymentStatus.PENDING, PaymentStatus.OVERDUE]
    ).aggregate(count=Count('id'), total=Sum('amount'))

    return {
        'total_students': school.students.filter(active=True).count(),
        'active_classes': school.classes.filter(active=True).count(),
        'monthly_revenue': payments.filter(
            status=PaymentStatus.PAID,
            paid_date__gte=month_start,
            paid_date__lte=today,
        ).aggregate(total=Sum('amount'))['total'] or Decimal('0.00'),
        'pending_payments': outstanding['count'],
        'pending_amount': outstanding['total'] or Decimal('0.00'),
        'attendance_this_week': Attendance.objects.filter(
            dance_class__school=school,
            attendance_date__gte=week_start,
            attendance_date__lte=today,
        ).count(),
    }

from .ai_analysis import (
    compute_churn_risk,
    analyze_churn_risk,
    attendance_stats,
    analyze_attendance,
    risk_score,
    risk_level,
)
from .billing_messages import generate_billing_messages, template_messages
from .reports import export_report, report_filename, dashboard_stats, REPORT_TYPES
from ..exceptions import (
    InsightsServiceError,
    AIGatewayError,
    AIGatewayNotConfiguredError,
    AIRateLimitError,
    AICreditsExhaustedError,
    InvalidReportTypeError,
)

__all__ = [
    'compute_churn_risk',
    'analyze_churn_risk',
    'attendance_stats',
    'analyze_attendance',
    'risk_score',
    'risk_level',
    'generate_billing_messages',
    'template_messages',
    'export_report',
    'report_filename',
    'dashboard_stats',
    'REPORT_TYPES',
    'InsightsServiceError',
    'AIGatewayError',
    'AIGatewayNotConfiguredError',
    'AIRateLimitError',
    'AICreditsExhaustedError',
    'InvalidReportTypeError',
]

from django.http import HttpResponse
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.schools.models import SchoolRole
from apps.schools.services import (
    get_school_for_admin,
    get_school_for_staff,
    SchoolsServiceError,
    SchoolNotFoundError,
    schools_for_user,
)
from .serializers import (
    BillingMessagesRequestSerializer,
    BillingMessagesSerializer,
    ExportQuerySerializer,
    DashboardStatsSerializer,
)
from .services import (
    analyze_churn_risk,
    analyze_attendance,
    generate_billing_messages,
    export_report,
    report_filename,
    dashboard_stats,
    AIGatewayError,
    AIRateLimitError,
    AICreditsExhaustedError,
)


def _resolve_school(resolver, school_id, user):
    """Return (school, None) or (None, error response)."""
    try:
        return resolver(school_id=school_id, user=user), None
    except SchoolNotFoundError as e:
        return None, Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except SchoolsServiceError as e:
        return None, Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)


def _ai_error_response(error):
    if isinstance(error, AIRateLimitError):
        return Response({'error': str(error)}, status=status.HTTP_429_TOO_MANY_REQUESTS)
    if isinstance(error, AICreditsExhaustedError):
        return Response({'error': str(error)}, status=status.HTTP_402_PAYMENT_REQUIRED)
    return Response({'error': str(error)}, status=status.HTTP_502_BAD_GATEWAY)


@extend_schema(
    responses={200: None},
    description="Students at risk of dropping out, with AI retention suggestions. Admin only.",
    tags=['insights'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def churn_risk(request, school_id):
    school, error = _resolve_school(get_school_for_admin, school_id, request.user)
    if error:
        return error
    return Response(analyze_churn_risk(school))


@extend_schema(
    responses={200: None},
    description="Low-attendance alerts and an AI analysis of the last 30 days. Admin only.",
    tags=['insights'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def attendance_analysis(request, school_id):
    school, error = _resolve_school(get_school_for_admin, school_id, request.user)
    if error:
        return error
    try:
        return Response(analyze_attendance(school))
    except AIGatewayError as e:
        return _ai_error_response(e)


@extend_schema(
    request=BillingMessagesRequestSerializer,
    responses={200: BillingMessagesSerializer},
    description="Formal, friendly and urgent collection messages for an overdue fee. Admins only.",
    tags=['insights'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def billing_messages(request):
    if not schools_for_user(request.user, roles=[SchoolRole.ADMIN]).exists():
        return Response(
            {'error': 'Apenas administradores podem gerar mensagens de cobrança.'},
            status=status.HTTP_403_FORBIDDEN,
        )

    serializer = BillingMessagesRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    try:
        messages = generate_billing_messages(
            student_name=data['studentName'],
            debt_amount=data['debtAmount'],
            due_date=data['dueDate'],
        )
    except AIGatewayError as e:
        return _ai_error_response(e)

    return Response(BillingMessagesSerializer(messages).data)


@extend_schema(
    parameters=[OpenApiParameter('type', str, description='attendances or payments', required=True)],
    responses={200: None},
    description="Download a CSV report. Admin only.",
    tags=['insights'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def export(request, school_id):
    school, error = _resolve_school(get_school_for_admin, school_id, request.user)
    if error:
        return error

    query = ExportQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    report_type = query.validated_data['type']

    response = HttpResponse(export_report(school, report_type), content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{report_filename(school, report_type)}"'
    return response


@extend_schema(
    responses={200: DashboardStatsSerializer},
    description="Headline numbers for the school dashboard.",
    tags=['insights'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request, school_id):
    school, error = _resolve_school(get_school_for_staff, school_id, request.user)
    if error:
        return error
    return Response(DashboardStatsSerializer(dashboard_stats(school)).data)

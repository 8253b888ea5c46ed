import logging

from django.conf import settings
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.crypto import constant_time_compare
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes, authentication_classes
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.schools.mixins import SchoolScopedViewSetMixin
from apps.schools.views import SchoolPagination
from apps.students.models import Student
from .models import Payment, Commission
from .serializers import (
    PaymentFilterSerializer,
    CommissionFilterSerializer,
    CreateChargeSerializer,
    MarkPaidSerializer,
    PaymentSerializer,
    CommissionSerializer,
    OutstandingSerializer,
    WebhookResultSerializer,
)
from .services import AsaasBillingService, PaymentService, CommissionService
from .exceptions import (
    GatewayConfigurationError,
    ChargeFailedError,
    InvalidWebhookPayloadError,
    PaymentNotFoundError,
    PaymentAlreadyPaidError,
)

logger = logging.getLogger(__name__)


class PaymentViewSet(SchoolScopedViewSetMixin, viewsets.ModelViewSet):
    """
    Student payments of the caller's schools.

    Staff can read, admins can create, edit and settle.
    """

    queryset = Payment.objects.select_related('student')
    serializer_class = PaymentSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SchoolPagination
    school_field = 'student__school'
    filter_serializer_class = PaymentFilterSerializer

    def filter_queryset_by_params(self, queryset, params):
        queryset = super().filter_queryset_by_params(queryset, params)
        if 'student' in params:
            queryset = queryset.filter(student_id=params['student'])
        if 'status' in params:
            queryset = queryset.filter(status=params['status'])
        if 'reference_month' in params:
            queryset = queryset.filter(reference_month=params['reference_month'])
        if 'due_from' in params:
            queryset = queryset.filter(due_date__gte=params['due_from'])
        if 'due_to' in params:
            queryset = queryset.filter(due_date__lte=params['due_to'])
        return queryset

    def perform_create(self, serializer):
        self.check_school_write(serializer.validated_data['student'].school)
        serializer.save()

    @action(detail=True, methods=['post'])
    def mark_paid(self, request, pk=None):
        """Settle a payment manually (admin only)."""
        payment = self.get_object()
        serializer = MarkPaidSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            payment = PaymentService.mark_paid(payment_id=payment.id, **serializer.validated_data)
        except PaymentAlreadyPaidError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PaymentSerializer(payment).data)


class CommissionViewSet(SchoolScopedViewSetMixin, viewsets.ModelViewSet):
    """Teacher commissions. Admin only, teachers see nothing here."""

    queryset = Commission.objects.select_related('teacher', 'school')
    serializer_class = CommissionSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SchoolPagination
    read_roles = SchoolScopedViewSetMixin.write_roles
    filter_serializer_class = CommissionFilterSerializer

    def filter_queryset_by_params(self, queryset, params):
        queryset = super().filter_queryset_by_params(queryset, params)
        if 'teacher' in params:
            queryset = queryset.filter(teacher_id=params['teacher'])
        if 'status' in params:
            queryset = queryset.filter(status=params['status'])
        if 'reference_month' in params:
            queryset = queryset.filter(reference_month=params['reference_month'])
        return queryset

    def perform_create(self, serializer):
        self.check_school_write(serializer.validated_data['school'])
        serializer.save()

    @action(detail=True, methods=['post'])
    def mark_paid(self, request, pk=None):
        commission = self.get_object()
        serializer = MarkPaidSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            commission = CommissionService.mark_paid(
                commission=commission,
                payment_date=serializer.validated_data.get('paid_date'),
            )
        except PaymentAlreadyPaidError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(CommissionSerializer(commission).data)


@extend_schema(
    request=CreateChargeSerializer,
    responses={201: PaymentSerializer},
    description="Create the student's Asaas customer if needed and issue a charge. Admin only.",
    tags=['payments'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def create_charge(request):
    serializer = CreateChargeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data.copy()

    student = data.pop('student')
    if not student.school.is_admin(request.user):
        return Response(
            {'error': 'Only school admins can create charges'},
            status=status.HTTP_403_FORBIDDEN
        )

    if 'due_date' not in data:
        data['due_date'] = timezone.localdate()

    try:
        payment = AsaasBillingService.create_customer_and_charge(student=student, **data)
    except GatewayConfigurationError as e:
        return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    except ChargeFailedError as e:
        return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)

    return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=None,
    responses={200: WebhookResultSerializer},
    description="Asaas payment event receiver.",
    tags=['payments'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def asaas_webhook(request):
    expected = settings.ASAAS_WEBHOOK_TOKEN
    if expected and not constant_time_compare(request.headers.get('asaas-access-token', ''), expected):
        logger.warning("Asaas webhook rejected: bad access token")
        return Response({'error': 'Unauthorized'}, status=status.HTTP_401_UNAUTHORIZED)

    try:
        result = AsaasBillingService.process_webhook(request.data)
    except InvalidWebhookPayloadError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except PaymentNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(WebhookResultSerializer(result).data)


@extend_schema(
    responses={200: OutstandingSerializer},
    description="Pending and overdue charges of a student.",
    tags=['payments'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def student_outstanding(request, student_id):
    student = get_object_or_404(Student.objects.select_related('school'), id=student_id)
    if not (student.school.is_staff_member(request.user) or student.account_id == request.user.id
            or student.guardian_links.filter(guardian__user=request.user).exists()):
        return Response({'error': 'Access denied'}, status=status.HTTP_403_FORBIDDEN)

    return Response(OutstandingSerializer(PaymentService.outstanding_for_student(student)).data)

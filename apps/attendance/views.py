from rest_framework import viewsets, status, mixins
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.exceptions import PermissionDenied
from drf_spectacular.utils import extend_schema

from apps.schools.mixins import SchoolScopedViewSetMixin
from apps.schools.views import SchoolPagination
from apps.schools.models import STAFF_ROLES
from apps.schools.services import get_school_for_staff, SchoolsServiceError, SchoolNotFoundError
from apps.students.models import DanceClass
from .models import Attendance
from .serializers import (
    AttendanceFilterSerializer,
    GenerateTokenSerializer,
    CheckInSerializer,
    MarkAttendanceSerializer,
    AttendanceSerializer,
    ClassTokenSerializer,
    WeeklySummarySerializer,
)
from .services import CheckInService, AttendanceService
from .exceptions import (
    InvalidTokenError,
    TokenExpiredError,
    NoLinkedStudentError,
    NotEnrolledError,
    AlreadyCheckedInError,
    NotClassStaffError,
    QRGenerationError,
)


class AttendanceViewSet(
    SchoolScopedViewSetMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    Attendance records of the caller's schools.

    Teachers may correct notes or delete a wrong record.
    """

    queryset = Attendance.objects.select_related('student', 'dance_class')
    serializer_class = AttendanceSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SchoolPagination
    school_field = 'dance_class__school'
    write_roles = STAFF_ROLES
    filter_serializer_class = AttendanceFilterSerializer

    def filter_queryset_by_params(self, queryset, params):
        queryset = super().filter_queryset_by_params(queryset, params)
        if 'dance_class' in params:
            queryset = queryset.filter(dance_class_id=params['dance_class'])
        if 'student' in params:
            queryset = queryset.filter(student_id=params['student'])
        if 'date_from' in params:
            queryset = queryset.filter(attendance_date__gte=params['date_from'])
        if 'date_to' in params:
            queryset = queryset.filter(attendance_date__lte=params['date_to'])
        return queryset


@extend_schema(
    request=GenerateTokenSerializer,
    responses={201: ClassTokenSerializer},
    description="Issue a 25-minute check-in token and its QR code for a class.",
    tags=['attendance'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def generate_token(request):
    serializer = GenerateTokenSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        issued = CheckInService.generate_class_token(
            class_id=serializer.validated_data['class_id'],
            user=request.user,
        )
    except DanceClass.DoesNotExist:
        return Response({'error': 'Class not found'}, status=status.HTTP_404_NOT_FOUND)
    except NotClassStaffError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except QRGenerationError as e:
        return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(ClassTokenSerializer(issued).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=CheckInSerializer,
    responses={201: AttendanceSerializer},
    description="Student check-in with a scanned class token.",
    tags=['attendance'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def check_in(request):
    serializer = CheckInSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        attendance, points = CheckInService.check_in(
            token=serializer.validated_data['token'],
            user=request.user,
        )
    except InvalidTokenError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except (TokenExpiredError, NoLinkedStudentError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except NotEnrolledError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except AlreadyCheckedInError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

    return Response({
        'success': True,
        'attendance': AttendanceSerializer(attendance).data,
        'points_awarded': points,
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=MarkAttendanceSerializer,
    responses={201: AttendanceSerializer(many=True)},
    description="Mark several students present. Teachers and admins only.",
    tags=['attendance'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def mark_attendance(request):
    serializer = MarkAttendanceSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    if not data['dance_class'].school.is_staff_member(request.user):
        raise PermissionDenied('Only teachers and admins can mark attendance.')

    created = AttendanceService.mark_attendance(marked_by=request.user, **data)
    return Response(AttendanceSerializer(created, many=True).data, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: WeeklySummarySerializer},
    description="Attendance count per day over the last 7 days.",
    tags=['attendance'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def weekly_summary(request, school_id):
    try:
        school = get_school_for_staff(school_id=school_id, user=request.user)
    except SchoolNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except SchoolsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response(WeeklySummarySerializer(AttendanceService.weekly_summary(school=school)).data)

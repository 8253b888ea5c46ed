from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.db.models import Q
from drf_spectacular.utils import extend_schema

from apps.schools.mixins import SchoolScopedViewSetMixin
from apps.schools.views import SchoolPagination
from apps.schools.services import StudentLimitReachedError
from .models import Student, DanceClass, Enrollment
from .serializers import (
    StudentFilterSerializer,
    ClassFilterSerializer,
    EnrollmentFilterSerializer,
    LinkGuardianSerializer,
    GuardianInviteRequestSerializer,
    AcceptGuardianInviteSerializer,
    StudentSerializer,
    DanceClassSerializer,
    ClassScheduleSerializer,
    EnrollmentSerializer,
    EnrollmentCreateSerializer,
    GuardianLinkSerializer,
    GuardianInviteSerializer,
)
from .services import (
    create_student,
    enroll_student,
    update_enrollment,
    link_guardian,
    invite_guardian,
    accept_guardian_invite,
    # Exceptions
    CrossSchoolReferenceError,
    ClassFullError,
    AlreadyEnrolledError,
    GuardianAlreadyLinkedError,
    InviteAlreadySentError,
    InvalidInviteError,
    InviteExpiredError,
    InviteEmailMismatchError,
)


class StudentViewSet(SchoolScopedViewSetMixin, viewsets.ModelViewSet):
    """
    Students of the caller's schools.

    Staff can read, admins can write. Creation respects the plan's
    student limit.
    """

    queryset = Student.objects.select_related('school', 'unit')
    serializer_class = StudentSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SchoolPagination
    filter_serializer_class = StudentFilterSerializer

    def filter_queryset_by_params(self, queryset, params):
        queryset = super().filter_queryset_by_params(queryset, params)
        if 'unit' in params:
            queryset = queryset.filter(unit_id=params['unit'])
        if params.get('active') is not None:
            queryset = queryset.filter(active=params['active'])
        if params.get('search'):
            queryset = queryset.filter(
                Q(full_name__icontains=params['search']) |
                Q(email__icontains=params['search'])
            )
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data.copy()
        school = data.pop('school')
        self.check_school_write(school)

        try:
            student = create_student(school=school, **data)
        except StudentLimitReachedError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except CrossSchoolReferenceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(StudentSerializer(student).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['get'])
    def enrollments(self, request, pk=None):
        """Classes the student is enrolled in."""
        student = self.get_object()
        enrollments = student.enrollments.select_related('dance_class')
        return Response(EnrollmentSerializer(enrollments, many=True).data)

    @action(detail=True, methods=['get', 'post'])
    def guardians(self, request, pk=None):
        """List guardians, or link a guardian account (admin only)."""
        student = self.get_object()

        if request.method == 'POST':
            serializer = LinkGuardianSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            try:
                link = link_guardian(student=student, **serializer.validated_data)
            except GuardianAlreadyLinkedError as e:
                return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
            return Response(GuardianLinkSerializer(link).data, status=status.HTTP_201_CREATED)

        links = student.guardian_links.select_related('guardian__user')
        return Response(GuardianLinkSerializer(links, many=True).data)

    @action(detail=True, methods=['get', 'post'], url_path='guardian-invites')
    def guardian_invites(self, request, pk=None):
        """List invites, or e-mail a new guardian invite (admin only)."""
        student = self.get_object()

        if request.method == 'POST':
            serializer = GuardianInviteRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            try:
                invite = invite_guardian(
                    student=student,
                    guardian_email=serializer.validated_data['guardian_email'],
                    invited_by=request.user,
                )
            except InviteAlreadySentError as e:
                return Response({'error': str(e)}, status=status.HTTP_429_TOO_MANY_REQUESTS)
            return Response({
                'success': True,
                'message': 'Convite enviado com sucesso!',
                'invite_id': invite.id,
            })

        invites = student.guardian_invites.all()
        return Response(GuardianInviteSerializer(invites, many=True).data)


class DanceClassViewSet(SchoolScopedViewSetMixin, viewsets.ModelViewSet):
    """Classes of the caller's schools with their schedules and rosters."""

    queryset = DanceClass.objects.select_related('school', 'unit', 'teacher')
    serializer_class = DanceClassSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SchoolPagination
    filter_serializer_class = ClassFilterSerializer

    def filter_queryset_by_params(self, queryset, params):
        queryset = super().filter_queryset_by_params(queryset, params)
        if 'teacher' in params:
            queryset = queryset.filter(teacher_id=params['teacher'])
        if params.get('active') is not None:
            queryset = queryset.filter(active=params['active'])
        return queryset

    def perform_create(self, serializer):
        self.check_school_write(serializer.validated_data['school'])
        serializer.save()

    @action(detail=True, methods=['get'])
    def students(self, request, pk=None):
        """Students with an active enrollment in this class."""
        dance_class = self.get_object()
        students = Student.objects.filter(
            enrollments__dance_class=dance_class,
            enrollments__status='active',
        ).order_by('full_name')
        return Response(StudentSerializer(students, many=True).data)

    @action(detail=True, methods=['get', 'post'])
    def schedules(self, request, pk=None):
        """List weekly slots, or add one (admin only)."""
        dance_class = self.get_object()

        if request.method == 'POST':
            serializer = ClassScheduleSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            schedule = serializer.save(dance_class=dance_class)
            return Response(ClassScheduleSerializer(schedule).data, status=status.HTTP_201_CREATED)

        return Response(ClassScheduleSerializer(dance_class.schedules.all(), many=True).data)


class EnrollmentViewSet(
    SchoolScopedViewSetMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    Enrollments (student x class).

    create: Enroll a student, enforcing capacity
    partial_update: Change status or end date; reactivation respects capacity
    """

    queryset = Enrollment.objects.select_related('student', 'dance_class')
    serializer_class = EnrollmentSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SchoolPagination
    school_field = 'dance_class__school'
    filter_serializer_class = EnrollmentFilterSerializer

    def filter_queryset_by_params(self, queryset, params):
        queryset = super().filter_queryset_by_params(queryset, params)
        if 'dance_class' in params:
            queryset = queryset.filter(dance_class_id=params['dance_class'])
        if 'student' in params:
            queryset = queryset.filter(student_id=params['student'])
        if 'status' in params:
            queryset = queryset.filter(status=params['status'])
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = EnrollmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        self.check_school_write(data['dance_class'].school)

        try:
            enrollment = enroll_student(**data)
        except CrossSchoolReferenceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except (ClassFullError, AlreadyEnrolledError) as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(EnrollmentSerializer(enrollment).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        enrollment = self.get_object()
        serializer = self.get_serializer(enrollment, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            enrollment = update_enrollment(enrollment=enrollment, **serializer.validated_data)
        except ClassFullError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)

        return Response(EnrollmentSerializer(enrollment).data)


@extend_schema(
    request=AcceptGuardianInviteSerializer,
    responses={201: GuardianLinkSerializer},
    description="Redeem an e-mailed guardian invite with the logged-in account.",
    tags=['students'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def accept_guardian_invite_view(request):
    serializer = AcceptGuardianInviteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        link = accept_guardian_invite(token=serializer.validated_data['token'], user=request.user)
    except InviteEmailMismatchError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except InviteExpiredError as e:
        return Response({'error': str(e)}, status=status.HTTP_410_GONE)
    except (InvalidInviteError, GuardianAlreadyLinkedError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(GuardianLinkSerializer(link).data, status=status.HTTP_201_CREATED)

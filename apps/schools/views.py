from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated, IsAdminUser, AllowAny
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from apps.notifications.models import NotificationStatus
from .models import School, Plan, Lead
from .serializers import (
    SchoolSerializer,
    SchoolCreateSerializer,
    SchoolMemberSerializer,
    UnitSerializer,
    PlanSerializer,
    SubscriptionSummarySerializer,
    UpdateMemberRoleSerializer,
    LeadSerializer,
    LeadUpdateSerializer,
)
from .permissions import IsSchoolAdmin, IsSchoolMember, IsSchoolOwner

from apps.schools.services import (
    create_school,
    delete_school,
    update_member_role,
    subscription_summary,
    schools_for_user,
    create_lead,
    send_welcome_email,
    # Exceptions
    InsufficientPermissionsError,
    NotMemberError,
    CannotChangeOwnerRoleError,
)


class SchoolPagination(PageNumberPagination):
    """Shared pagination for school-scoped listings."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class SchoolViewSet(viewsets.ModelViewSet):
    """
    ViewSet for School CRUD operations.

    list: Schools the user belongs to
    create: Create a school (creator becomes admin)
    retrieve: School profile
    update/partial_update: Edit profile (admin only)
    destroy: Delete school (owner only)
    """

    serializer_class = SchoolSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SchoolPagination

    def get_queryset(self):
        """Return only schools where user is a member."""
        return schools_for_user(self.request.user).select_related('admin')

    def get_serializer_class(self):
        if self.action == 'create':
            return SchoolCreateSerializer
        return SchoolSerializer

    def get_permissions(self):
        """Set permissions based on action."""
        if self.action in ['update', 'partial_update']:
            return [IsAuthenticated(), IsSchoolAdmin()]
        if self.action == 'destroy':
            return [IsAuthenticated(), IsSchoolOwner()]
        return [IsAuthenticated(), IsSchoolMember()]

    def create(self, request, *args, **kwargs):
        """Create a new school."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        school = create_school(admin=request.user, **serializer.validated_data)

        output_serializer = SchoolSerializer(school, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        school = self.get_object()
        try:
            delete_school(school_id=school.id, user=request.user)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get'])
    def members(self, request, pk=None):
        """List members of the school."""
        school = self.get_object()
        memberships = school.memberships.select_related('user').order_by('role', 'joined_at')
        return Response(SchoolMemberSerializer(memberships, many=True).data)

    @action(detail=True, methods=['post'], permission_classes=[IsAuthenticated, IsSchoolAdmin])
    def update_member_role(self, request, pk=None):
        """Update member's role (admin only)."""
        school = self.get_object()
        serializer = UpdateMemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            membership = update_member_role(
                school_id=school.id,
                user_id=serializer.validated_data['user_id'],
                new_role=serializer.validated_data['role'],
                updated_by=request.user,
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (NotMemberError, CannotChangeOwnerRoleError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SchoolMemberSerializer(membership).data)

    @action(detail=True, methods=['get', 'post'])
    def units(self, request, pk=None):
        """List units, or create one (admin only)."""
        school = self.get_object()

        if request.method == 'POST':
            if not school.is_admin(request.user):
                return Response(
                    {'error': 'Only school admins can create units'},
                    status=status.HTTP_403_FORBIDDEN
                )
            serializer = UnitSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            unit = serializer.save(school=school)
            return Response(UnitSerializer(unit).data, status=status.HTTP_201_CREATED)

        return Response(UnitSerializer(school.units.all(), many=True).data)

    @action(detail=True, methods=['get'])
    def subscription(self, request, pk=None):
        """Plan, status and student-limit usage."""
        school = self.get_object()
        return Response(SubscriptionSummarySerializer(subscription_summary(school)).data)


class LeadViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """
    Landing page leads.

    create: Public contact form, sends the welcome e-mail
    list/retrieve/partial_update: Lead board for platform staff
    welcome_email: Resend the welcome e-mail
    """

    queryset = Lead.objects.all()
    permission_classes = [IsAdminUser]
    pagination_class = SchoolPagination

    def get_permissions(self):
        if self.action == 'create':
            return [AllowAny()]
        return super().get_permissions()

    def get_serializer_class(self):
        if self.action in ['update', 'partial_update']:
            return LeadUpdateSerializer
        return LeadSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if 'status' in self.request.query_params:
            queryset = queryset.filter(status=self.request.query_params['status'])
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        lead = create_lead(**serializer.validated_data)
        return Response(LeadSerializer(lead).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], url_path='welcome-email')
    def welcome_email(self, request, pk=None):
        log = send_welcome_email(self.get_object(), sent_by=request.user)
        return Response({'success': log.status == NotificationStatus.SENT, 'message': log.message})


@extend_schema(
    responses={200: PlanSerializer(many=True)},
    description="List plans available for subscription.",
    tags=['schools'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def list_plans(request):
    """Public pricing table."""
    plans = Plan.objects.filter(active=True)
    return Response(PlanSerializer(plans, many=True).data)

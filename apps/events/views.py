from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.schools.mixins import SchoolScopedViewSetMixin
from apps.schools.views import SchoolPagination
from apps.schools.services import get_school_for_staff, SchoolsServiceError, SchoolNotFoundError
from .models import Event, Ticket
from .serializers import (
    EventSerializer,
    TicketSerializer,
    ReserveTicketSerializer,
    ScanTicketSerializer,
    GeneratedTicketSerializer,
)
from .services import reserve_ticket, mark_ticket_paid, generate_ticket, scan_ticket
from .exceptions import TicketNotFoundError, TicketAlreadyUsedError, InvalidTicketStatusError


class EventViewSet(SchoolScopedViewSetMixin, viewsets.ModelViewSet):
    """
    Events of the caller's schools.

    tickets (GET): Tickets issued for the event
    tickets (POST): Reserve a ticket (admin)
    """

    queryset = Event.objects.select_related('school')
    serializer_class = EventSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SchoolPagination

    def perform_create(self, serializer):
        self.check_school_write(serializer.validated_data['school'])
        serializer.save()

    @action(detail=True, methods=['get', 'post'])
    def tickets(self, request, pk=None):
        event = self.get_object()

        if request.method == 'POST':
            serializer = ReserveTicketSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            student = serializer.validated_data.get('student')
            if student is not None and student.school_id != event.school_id:
                return Response(
                    {'error': 'Student does not belong to this school'},
                    status=status.HTTP_400_BAD_REQUEST
                )
            ticket = reserve_ticket(event=event, **serializer.validated_data)
            return Response(TicketSerializer(ticket).data, status=status.HTTP_201_CREATED)

        tickets = event.tickets.select_related('student')
        return Response(TicketSerializer(tickets, many=True).data)


@extend_schema(
    request=None,
    responses={200: TicketSerializer},
    description="Mark a reserved ticket as paid. Admin only.",
    tags=['events'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def pay_ticket(request, ticket_id):
    ticket = get_object_or_404(Ticket.objects.select_related('event__school'), id=ticket_id)
    if not ticket.event.school.is_admin(request.user):
        return Response({'error': 'Only school admins can confirm payments'}, status=status.HTTP_403_FORBIDDEN)

    try:
        ticket = mark_ticket_paid(ticket_id=ticket.id)
    except InvalidTicketStatusError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(TicketSerializer(ticket).data)


@extend_schema(
    request=None,
    responses={200: GeneratedTicketSerializer},
    description="Printable HTML ticket with QR code, base64 encoded.",
    tags=['events'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def generate_ticket_view(request, ticket_id):
    ticket = get_object_or_404(
        Ticket.objects.select_related('event__school', 'student'),
        id=ticket_id,
    )
    is_holder = ticket.student is not None and ticket.student.account_id == request.user.id
    if not (is_holder or ticket.event.school.is_staff_member(request.user)):
        return Response({'error': 'Ticket not found'}, status=status.HTTP_404_NOT_FOUND)

    return Response(GeneratedTicketSerializer(generate_ticket(ticket)).data)


@extend_schema(
    request=ScanTicketSerializer,
    responses={200: TicketSerializer},
    description="Validate a ticket QR at the door. Paid tickets become used.",
    tags=['events'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def scan_ticket_view(request):
    serializer = ScanTicketSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        school = get_school_for_staff(school_id=serializer.validated_data['school'], user=request.user)
    except SchoolNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except SchoolsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    try:
        ticket = scan_ticket(payload=serializer.validated_data['payload'], school=school)
    except TicketNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except TicketAlreadyUsedError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except InvalidTicketStatusError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({
        'message': f"Acesso liberado para {ticket.buyer_name}.",
        'ticket': TicketSerializer(ticket).data,
    })

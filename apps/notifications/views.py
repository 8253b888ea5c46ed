from rest_framework import viewsets, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.schools.mixins import SchoolScopedViewSetMixin
from apps.schools.views import SchoolPagination
from .models import NotificationLog, WhatsAppMessage
from .serializers import (
    SendWhatsAppSerializer,
    SendNotificationSerializer,
    NotificationLogSerializer,
    WhatsAppMessageSerializer,
)
from .services import queue_whatsapp_message, send_notification
from .exceptions import StudentNotFoundError, AccessDeniedError, RateLimitExceededError


class NotificationLogViewSet(viewsets.ReadOnlyModelViewSet):
    """The caller's own notification inbox."""

    serializer_class = NotificationLogSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SchoolPagination

    def get_queryset(self):
        return NotificationLog.objects.filter(user=self.request.user).select_related('student')


class WhatsAppMessageViewSet(SchoolScopedViewSetMixin, viewsets.ReadOnlyModelViewSet):
    """Message queue of the caller's schools (admins only)."""

    queryset = WhatsAppMessage.objects.select_related('student')
    serializer_class = WhatsAppMessageSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SchoolPagination
    school_field = 'student__school'
    read_roles = SchoolScopedViewSetMixin.write_roles


def _first_error(errors):
    """Flatten serializer errors to the single message the client shows."""
    for messages in errors.values():
        if messages:
            return str(messages[0])
    return 'Dados inválidos'


@extend_schema(
    request=SendWhatsAppSerializer,
    responses={200: None},
    description="Queue a WhatsApp message to a student. School admins only, 10 per student per hour.",
    tags=['notifications'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def send_whatsapp(request):
    serializer = SendWhatsAppSerializer(data=request.data)
    if not serializer.is_valid():
        return Response({'error': _first_error(serializer.errors)}, status=status.HTTP_400_BAD_REQUEST)
    data = serializer.validated_data

    try:
        whatsapp = queue_whatsapp_message(
            user=request.user,
            phone=data['phone'],
            message=data['message'],
            student_id=data['studentId'],
            message_type=data['type'],
        )
    except StudentNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except AccessDeniedError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
    except RateLimitExceededError as e:
        return Response({'error': str(e)}, status=status.HTTP_429_TOO_MANY_REQUESTS)

    return Response({'success': True, 'messageId': whatsapp.id})


@extend_schema(
    request=SendNotificationSerializer,
    responses={200: None},
    description="Send yourself a notification about a student, respecting your preferences.",
    tags=['notifications'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def send_notification_view(request):
    serializer = SendNotificationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    student = data.get('student')
    if student is not None and not student.school.is_staff_member(request.user):
        return Response({'error': 'Acesso negado'}, status=status.HTTP_403_FORBIDDEN)

    result = send_notification(user=request.user, **data)
    return Response(result)

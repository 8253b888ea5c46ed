from rest_framework import serializers
from apps.students.models import Student
from .models import NotificationLog, NotificationType, WhatsAppMessage, WhatsAppMessageType

PHONE_REGEX = r'^\+?[1-9]\d{10,14}$'


class SendWhatsAppSerializer(serializers.Serializer):
    """Request body of the WhatsApp endpoint (camelCase like the client sends it)."""

    phone = serializers.RegexField(
        PHONE_REGEX,
        error_messages={
            'invalid': 'Formato de telefone inválido',
            'required': 'Telefone inválido',
            'blank': 'Telefone inválido',
        },
    )
    message = serializers.CharField(
        min_length=1,
        max_length=1000,
        trim_whitespace=False,
        error_messages={
            'required': 'Mensagem inválida',
            'blank': 'Mensagem inválida',
            'max_length': 'Mensagem deve ter entre 1 e 1000 caracteres',
            'min_length': 'Mensagem deve ter entre 1 e 1000 caracteres',
        },
    )
    studentId = serializers.UUIDField(
        error_messages={
            'required': 'ID do aluno inválido',
            'invalid': 'ID do aluno inválido',
        },
    )
    type = serializers.ChoiceField(
        choices=WhatsAppMessageType.choices,
        error_messages={
            'required': 'Tipo de mensagem inválido',
            'invalid_choice': 'Tipo de mensagem inválido',
        },
    )


class SendNotificationSerializer(serializers.Serializer):
    student = serializers.PrimaryKeyRelatedField(
        queryset=Student.objects.all(),
        required=False,
        allow_null=True,
    )
    notification_type = serializers.ChoiceField(choices=NotificationType.choices)
    message = serializers.CharField(max_length=2000)


class NotificationLogSerializer(serializers.ModelSerializer):
    student_name = serializers.CharField(source='student.full_name', read_only=True, default=None)

    class Meta:
        model = NotificationLog
        fields = ['id', 'student', 'student_name', 'notification_type', 'message', 'sent_at', 'status']
        read_only_fields = fields


class WhatsAppMessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = WhatsAppMessage
        fields = ['id', 'phone', 'message', 'student', 'type', 'status', 'created_at', 'sent_at']
        read_only_fields = fields

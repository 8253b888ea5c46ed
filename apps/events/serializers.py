from rest_framework import serializers
from apps.schools.models import School
from apps.students.models import Student
from .models import Event, Ticket


class EventSerializer(serializers.ModelSerializer):
    school = serializers.PrimaryKeyRelatedField(queryset=School.objects.all())
    title = serializers.CharField(min_length=3, max_length=200)
    tickets_sold = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = [
            'id',
            'school',
            'title',
            'description',
            'event_date',
            'location',
            'ticket_price',
            'tickets_sold',
            'created_at',
        ]
        read_only_fields = ['id', 'created_at']

    def get_tickets_sold(self, obj):
        return obj.tickets.exclude(status='reserved').count()


class TicketSerializer(serializers.ModelSerializer):
    event_title = serializers.CharField(source='event.title', read_only=True)
    student_name = serializers.CharField(source='student.full_name', read_only=True, default=None)

    class Meta:
        model = Ticket
        fields = [
            'id',
            'event',
            'event_title',
            'student',
            'student_name',
            'buyer_name',
            'amount',
            'status',
            'used_at',
            'created_at',
        ]
        read_only_fields = fields


class ReserveTicketSerializer(serializers.Serializer):
    buyer_name = serializers.CharField(min_length=2, max_length=200)
    student = serializers.PrimaryKeyRelatedField(
        queryset=Student.objects.all(),
        required=False,
        allow_null=True,
    )


class ScanTicketSerializer(serializers.Serializer):
    payload = serializers.CharField(max_length=200)
    school = serializers.UUIDField()


class GeneratedTicketSerializer(serializers.Serializer):
    html = serializers.CharField()
    message = serializers.CharField()

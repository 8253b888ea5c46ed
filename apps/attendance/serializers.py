from rest_framework import serializers
from apps.schools.mixins import SchoolFilterSerializer
from apps.students.models import DanceClass, Student
from .models import Attendance


# =============================================================================
# Input Serializers
# =============================================================================

class AttendanceFilterSerializer(SchoolFilterSerializer):
    """
    Query Parameters:
        school (UUID): Filter by school
        dance_class (UUID): Filter by class
        student (UUID): Filter by student
        date_from (date): Attendance on or after this date
        date_to (date): Attendance on or before this date
    """

    dance_class = serializers.UUIDField(required=False)
    student = serializers.UUIDField(required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

    def validate(self, attrs):
        if 'date_from' in attrs and 'date_to' in attrs and attrs['date_from'] > attrs['date_to']:
            raise serializers.ValidationError('date_from must be before date_to')
        return attrs


class GenerateTokenSerializer(serializers.Serializer):
    class_id = serializers.UUIDField()


class CheckInSerializer(serializers.Serializer):
    token = serializers.CharField(max_length=100)


class MarkAttendanceSerializer(serializers.Serializer):
    dance_class = serializers.PrimaryKeyRelatedField(queryset=DanceClass.objects.all())
    student_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    attendance_date = serializers.DateField()
    notes = serializers.CharField(required=False, allow_blank=True, default='')


# =============================================================================
# Output Serializers
# =============================================================================

class AttendanceSerializer(serializers.ModelSerializer):
    student_name = serializers.CharField(source='student.full_name', read_only=True)
    class_name = serializers.CharField(source='dance_class.name', read_only=True)

    class Meta:
        model = Attendance
        fields = [
            'id',
            'student',
            'student_name',
            'dance_class',
            'class_name',
            'attendance_date',
            'marked_at',
            'marked_by',
            'notes',
        ]
        read_only_fields = ['id', 'student', 'dance_class', 'attendance_date', 'marked_at', 'marked_by']


class ClassTokenSerializer(serializers.Serializer):
    token = serializers.CharField()
    class_id = serializers.UUIDField()
    valid_from = serializers.DateTimeField()
    valid_until = serializers.DateTimeField()
    qr_code = serializers.CharField()


class WeeklyDaySerializer(serializers.Serializer):
    date = serializers.DateField()
    count = serializers.IntegerField()


class WeeklySummarySerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()
    total = serializers.IntegerField()
    days = WeeklyDaySerializer(many=True)

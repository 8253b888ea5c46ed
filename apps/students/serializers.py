from rest_framework import serializers
from apps.schools.mixins import SchoolFilterSerializer
from apps.schools.models import School, Unit
from apps.accounts.models import User
from .models import (
    Student,
    StudentGuardian,
    GuardianInvite,
    DanceClass,
    ClassSchedule,
    Enrollment,
    EnrollmentStatus,
    TIME_OF_DAY_VALIDATOR,
)


# =============================================================================
# Input Serializers
# =============================================================================

class StudentFilterSerializer(SchoolFilterSerializer):
    """
    Query Parameters:
        school (UUID): Filter by school
        unit (UUID): Filter by unit
        active (bool): Filter by active flag
        search (str): Case-insensitive name search
    """

    unit = serializers.UUIDField(required=False)
    active = serializers.BooleanField(required=False, allow_null=True, default=None)
    search = serializers.CharField(required=False, max_length=100)


class ClassFilterSerializer(SchoolFilterSerializer):
    teacher = serializers.UUIDField(required=False)
    active = serializers.BooleanField(required=False, allow_null=True, default=None)


class EnrollmentFilterSerializer(SchoolFilterSerializer):
    dance_class = serializers.UUIDField(required=False)
    student = serializers.UUIDField(required=False)
    status = serializers.ChoiceField(choices=EnrollmentStatus.choices, required=False)


class LinkGuardianSerializer(serializers.Serializer):
    user_id = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), source='user')
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    relationship = serializers.CharField(max_length=50, required=False, allow_blank=True, default='')


class GuardianInviteRequestSerializer(serializers.Serializer):
    guardian_email = serializers.EmailField(max_length=255, error_messages={'invalid': 'Email inválido'})


class AcceptGuardianInviteSerializer(serializers.Serializer):
    token = serializers.CharField(max_length=100)


# =============================================================================
# Model Serializers
# =============================================================================

class StudentSerializer(serializers.ModelSerializer):
    """Student record with form validation rules."""

    school = serializers.PrimaryKeyRelatedField(queryset=School.objects.all())
    unit = serializers.PrimaryKeyRelatedField(queryset=Unit.objects.all(), required=False, allow_null=True)
    full_name = serializers.CharField(
        min_length=3,
        max_length=100,
        error_messages={
            'min_length': 'Nome deve ter no mínimo 3 caracteres',
            'max_length': 'Nome muito longo',
        },
    )
    email = serializers.EmailField(
        max_length=255,
        required=False,
        allow_blank=True,
        error_messages={'invalid': 'Email inválido'},
    )
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    emergency_contact = serializers.CharField(max_length=100, required=False, allow_blank=True)
    emergency_phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    active = serializers.BooleanField(default=True)

    class Meta:
        model = Student
        fields = [
            'id',
            'school',
            'unit',
            'full_name',
            'email',
            'phone',
            'birth_date',
            'emergency_contact',
            'emergency_phone',
            'photo_url',
            'active',
            'account',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate(self, attrs):
        school = attrs.get('school') or getattr(self.instance, 'school', None)
        unit = attrs.get('unit')
        if unit is not None and school is not None and unit.school_id != school.id:
            raise serializers.ValidationError({'unit': 'Unidade não pertence a esta escola'})
        if self.instance is not None and 'school' in attrs and attrs['school'].id != self.instance.school_id:
            raise serializers.ValidationError({'school': 'A escola do aluno não pode ser alterada'})
        return attrs


class DanceClassSerializer(serializers.ModelSerializer):
    """Class record with form validation rules."""

    school = serializers.PrimaryKeyRelatedField(queryset=School.objects.all())
    unit = serializers.PrimaryKeyRelatedField(queryset=Unit.objects.all(), required=False, allow_null=True)
    teacher = serializers.PrimaryKeyRelatedField(queryset=User.objects.all(), required=False, allow_null=True)
    name = serializers.CharField(
        min_length=3,
        max_length=100,
        error_messages={
            'min_length': 'Nome deve ter no mínimo 3 caracteres',
            'max_length': 'Nome muito longo',
        },
    )
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    schedule_day = serializers.CharField(max_length=20, error_messages={'blank': 'Selecione um dia'})
    schedule_time = serializers.CharField(max_length=5, error_messages={'blank': 'Informe o horário'})
    duration_minutes = serializers.IntegerField(
        min_value=15,
        max_value=240,
        default=60,
        error_messages={
            'min_value': 'Mínimo 15 minutos',
            'max_value': 'Máximo 240 minutos',
        },
    )
    max_students = serializers.IntegerField(min_value=1, max_value=100, default=30)
    active = serializers.BooleanField(default=True)
    enrolled_count = serializers.SerializerMethodField()

    class Meta:
        model = DanceClass
        fields = [
            'id',
            'school',
            'unit',
            'teacher',
            'name',
            'description',
            'schedule_day',
            'schedule_time',
            'duration_minutes',
            'max_students',
            'active',
            'enrolled_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_enrolled_count(self, obj):
        return obj.active_enrollment_count()

    def validate(self, attrs):
        school = attrs.get('school') or getattr(self.instance, 'school', None)
        unit = attrs.get('unit')
        teacher = attrs.get('teacher')
        if unit is not None and unit.school_id != school.id:
            raise serializers.ValidationError({'unit': 'Unidade não pertence a esta escola'})
        if teacher is not None and not school.is_staff_member(teacher):
            raise serializers.ValidationError({'teacher': 'Professor não pertence a esta escola'})
        return attrs


class ClassScheduleSerializer(serializers.ModelSerializer):
    day_of_week = serializers.IntegerField(min_value=0, max_value=6)
    start_time = serializers.CharField(validators=[TIME_OF_DAY_VALIDATOR])
    end_time = serializers.CharField(validators=[TIME_OF_DAY_VALIDATOR])

    class Meta:
        model = ClassSchedule
        fields = ['id', 'dance_class', 'day_of_week', 'start_time', 'end_time', 'created_at']
        read_only_fields = ['id', 'dance_class', 'created_at']


class EnrollmentSerializer(serializers.ModelSerializer):
    """Output serializer for enrollments."""

    student_name = serializers.CharField(source='student.full_name', read_only=True)
    class_name = serializers.CharField(source='dance_class.name', read_only=True)

    class Meta:
        model = Enrollment
        fields = [
            'id',
            'student',
            'student_name',
            'dance_class',
            'class_name',
            'start_date',
            'end_date',
            'status',
            'created_at',
        ]
        read_only_fields = ['id', 'student', 'dance_class', 'created_at']


class EnrollmentCreateSerializer(serializers.Serializer):
    student = serializers.PrimaryKeyRelatedField(
        queryset=Student.objects.all(),
        error_messages={'does_not_exist': 'Selecione um aluno'},
    )
    dance_class = serializers.PrimaryKeyRelatedField(
        queryset=DanceClass.objects.all(),
        error_messages={'does_not_exist': 'Selecione uma turma'},
    )
    start_date = serializers.DateField(error_messages={'required': 'Informe a data de início'})
    end_date = serializers.DateField(required=False, allow_null=True)
    status = serializers.ChoiceField(choices=EnrollmentStatus.choices, default=EnrollmentStatus.ACTIVE)

    def validate(self, attrs):
        end_date = attrs.get('end_date')
        if end_date and end_date < attrs['start_date']:
            raise serializers.ValidationError({'end_date': 'Data final deve ser após a data de início'})
        return attrs


class GuardianLinkSerializer(serializers.ModelSerializer):
    guardian_name = serializers.CharField(source='guardian.user.get_display_name', read_only=True)
    guardian_email = serializers.EmailField(source='guardian.user.email', read_only=True)
    phone = serializers.CharField(source='guardian.phone', read_only=True)

    class Meta:
        model = StudentGuardian
        fields = ['id', 'student', 'guardian', 'guardian_name', 'guardian_email', 'phone', 'relationship']
        read_only_fields = fields


class GuardianInviteSerializer(serializers.ModelSerializer):
    """Invite as shown to school staff; the token only travels by e-mail."""

    class Meta:
        model = GuardianInvite
        fields = ['id', 'student', 'guardian_email', 'status', 'expires_at', 'accepted_at', 'created_at']
        read_only_fields = fields

from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display and preference updates."""

    schools = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'phone',
            'email_verified',
            'notifications_enabled',
            'email_on_absence',
            'email_on_late_payment',
            'created_at',
            'last_login',
            'schools',
        ]
        read_only_fields = ['id', 'email', 'email_verified', 'created_at', 'last_login']

    def get_schools(self, obj):
        """Schools the user belongs to and the role held in each."""
        memberships = obj.school_memberships.select_related('school').order_by('joined_at')
        return [
            {'school_id': str(m.school_id), 'school_name': m.school.name, 'role': m.role}
            for m in memberships
        ]


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    display_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class InviteStaffSerializer(serializers.Serializer):
    """
    Input for staff invitations.

    Fields are optional at this level so the service can answer with its
    own message when something is missing.
    """

    email = serializers.EmailField(required=False, allow_blank=True)
    role = serializers.CharField(max_length=20, required=False, allow_blank=True)
    school_id = serializers.UUIDField(required=False, allow_null=True)


class UserPublicSerializer(serializers.ModelSerializer):
    """Public user info (for teachers, members, etc.)."""

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name']
        read_only_fields = fields

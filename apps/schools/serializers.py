from rest_framework import serializers
from .models import School, SchoolMembership, SchoolRole, Unit, Plan, Lead
from apps.accounts.serializers import UserPublicSerializer


HEX_COLOR_REGEX = r'^#[0-9a-fA-F]{6}$'


class SchoolSerializer(serializers.ModelSerializer):
    """Full school profile."""

    admin = UserPublicSerializer(read_only=True)
    primary_color = serializers.RegexField(HEX_COLOR_REGEX, required=False)
    my_role = serializers.SerializerMethodField()

    class Meta:
        model = School
        fields = [
            'id',
            'name',
            'city',
            'contact_email',
            'contact_phone',
            'logo_url',
            'primary_color',
            'admin',
            'my_role',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'admin', 'created_at', 'updated_at']

    def get_my_role(self, obj):
        request = self.context.get('request')
        if request is None:
            return None
        return obj.get_user_role(request.user)


class SchoolCreateSerializer(serializers.ModelSerializer):
    """Input for creating a school."""

    primary_color = serializers.RegexField(HEX_COLOR_REGEX, required=False)

    class Meta:
        model = School
        fields = ['name', 'city', 'contact_email', 'contact_phone', 'logo_url', 'primary_color']


class SchoolMemberSerializer(serializers.ModelSerializer):
    user = UserPublicSerializer(read_only=True)

    class Meta:
        model = SchoolMembership
        fields = ['id', 'user', 'role', 'joined_at']
        read_only_fields = fields


class UnitSerializer(serializers.ModelSerializer):

    class Meta:
        model = Unit
        fields = ['id', 'school', 'name', 'address', 'city', 'phone', 'active', 'created_at']
        read_only_fields = ['id', 'school', 'created_at']


class PlanSerializer(serializers.ModelSerializer):

    class Meta:
        model = Plan
        fields = ['id', 'name', 'monthly_price', 'student_limit', 'features']
        read_only_fields = fields


class SubscriptionSummarySerializer(serializers.Serializer):
    status = serializers.CharField()
    is_active = serializers.BooleanField()
    days_remaining = serializers.IntegerField()
    renew_at = serializers.DateTimeField(allow_null=True)
    plan = serializers.CharField(allow_null=True)
    student_limit = serializers.IntegerField(allow_null=True)
    current_students = serializers.IntegerField()


class UpdateMemberRoleSerializer(serializers.Serializer):
    user_id = serializers.UUIDField()
    role = serializers.ChoiceField(choices=SchoolRole.choices)


class LeadSerializer(serializers.ModelSerializer):
    """Landing page contact form; status is managed by platform staff."""

    school_name = serializers.CharField(
        min_length=3,
        max_length=100,
        error_messages={'min_length': 'Nome da escola deve ter pelo menos 3 caracteres'},
    )
    city = serializers.CharField(min_length=2, max_length=100, error_messages={'min_length': 'Cidade inválida'})
    whatsapp = serializers.CharField(min_length=10, max_length=20, error_messages={'min_length': 'WhatsApp inválido'})
    email = serializers.EmailField(max_length=255, error_messages={'invalid': 'Email inválido'})

    class Meta:
        model = Lead
        fields = ['id', 'school_name', 'city', 'email', 'whatsapp', 'notes', 'status', 'source', 'created_at']
        read_only_fields = ['id', 'status', 'created_at']


class LeadUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Lead
        fields = ['status', 'notes']

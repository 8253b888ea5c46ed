"""
Tenant scoping for school-owned resources.

ViewSets over models that hang off a School mix this in to limit every
queryset to the caller's schools and to gate writes by school role.
"""

from operator import attrgetter

from rest_framework import serializers
from rest_framework.permissions import SAFE_METHODS
from rest_framework.exceptions import PermissionDenied

from .models import SchoolRole, STAFF_ROLES
from .services import schools_for_user


class SchoolFilterSerializer(serializers.Serializer):
    """
    Validate the common ``?school=`` query parameter.

    Query Parameters:
        school (UUID): Restrict results to one school
    """

    school = serializers.UUIDField(required=False)


class SchoolScopedViewSetMixin:
    """
    Restrict a ModelViewSet to schools where the user holds a role.

    Attributes:
        school_field: ORM path from the model to its School
        read_roles: Roles allowed to read (safe methods)
        write_roles: Roles allowed to write
        filter_serializer_class: Serializer validating query parameters
    """

    school_field = 'school'
    read_roles = STAFF_ROLES
    write_roles = (SchoolRole.ADMIN,)
    filter_serializer_class = SchoolFilterSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        schools = schools_for_user(self.request.user, roles=self.read_roles)
        queryset = queryset.filter(**{f'{self.school_field}__in': schools})

        if self.action == 'list':
            filter_serializer = self.filter_serializer_class(data=self.request.query_params)
            filter_serializer.is_valid(raise_exception=True)
            queryset = self.filter_queryset_by_params(queryset, filter_serializer.validated_data)

        return queryset

    def filter_queryset_by_params(self, queryset, params):
        """Apply validated filters; subclasses extend for their own params."""
        if 'school' in params:
            queryset = queryset.filter(**{self.school_field: params['school']})
        return queryset

    def get_object_school(self, obj):
        return attrgetter(self.school_field.replace('__', '.'))(obj)

    def check_school_write(self, school):
        """Raise PermissionDenied unless the user may write in ``school``."""
        if school.get_user_role(self.request.user) not in self.write_roles:
            raise PermissionDenied('You do not have permission to manage records of this school.')

    def get_incoming_school(self, validated_data):
        """School an update would move the record into, or None if unchanged."""
        head, _, rest = self.school_field.partition('__')
        if head not in validated_data:
            return None
        value = validated_data[head]
        return attrgetter(rest.replace('__', '.'))(value) if rest else value

    def perform_update(self, serializer):
        school = self.get_incoming_school(serializer.validated_data)
        if school is not None:
            self.check_school_write(school)
        super().perform_update(serializer)

    def check_object_permissions(self, request, obj):
        super().check_object_permissions(request, obj)
        if request.method not in SAFE_METHODS:
            self.check_school_write(self.get_object_school(obj))

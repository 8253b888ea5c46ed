from rest_framework import permissions


class IsSchoolAdmin(permissions.BasePermission):
    """
    Permission: User must be an admin of the school.
    """

    message = 'Only school admins can perform this action.'

    def has_object_permission(self, request, view, obj):
        # obj is a School instance
        return obj.is_admin(request.user)


class IsSchoolMember(permissions.BasePermission):
    """
    Permission: User must have any role in the school.
    """

    message = 'You must be a member of this school.'

    def has_object_permission(self, request, view, obj):
        # obj is a School instance
        return obj.get_user_role(request.user) is not None


class IsSchoolOwner(permissions.BasePermission):
    """
    Permission: User must be the school owner.
    """

    message = 'Only the school owner can perform this action.'

    def has_object_permission(self, request, view, obj):
        return obj.admin_id == request.user.id

"""Request-level permissions shared by all apps."""

from rest_framework.permissions import BasePermission

from profiles.roles import is_admin


class IsAdmin(BasePermission):
    """Allows access only to admins (staff users or profile type 'admin')."""

    message = "Admin only."

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and is_admin(user))

"""Orders API permissions.

Object-level permission for reading a custom order. Status updates are
authorized inside ``orders.services.update_status`` because the admin and
tailor tiers follow different rules there.
"""

from rest_framework.permissions import BasePermission

from orders.services import can_view_order


class CanViewCustomOrder(BasePermission):
    """Allows access to admins, the ordering customer and the assigned tailor."""

    message = "Not allowed to view this order."

    def has_object_permission(self, request, view, obj):
        return can_view_order(request.user, obj)

"""CustomOrder status workflow.

``update_status`` applies the two permission tiers: admins set any status
from the status domain without consulting the transition table; everyone
else must be the order's assigned tailor and follow ``ALLOWED_TRANSITIONS``.
The final write is conditional on the status that was validated, so two
concurrent transitions from the same state cannot both succeed.
"""

import logging

from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from common.exceptions import InvalidTransition
from profiles.roles import is_admin
from tailors.services import tailor_for_user

from .models import CustomOrder
from .transitions import ensure_transition

logger = logging.getLogger(__name__)


def get_custom_order(order_id) -> CustomOrder:
    try:
        return CustomOrder.objects.select_related("customer", "assigned_tailor").get(pk=order_id)
    except CustomOrder.DoesNotExist:
        raise NotFound("Order not found.")


def can_view_order(user, order: CustomOrder) -> bool:
    """Admins, the owning customer and the assigned tailor may view an order."""
    if not user or not user.is_authenticated:
        return False
    if is_admin(user) or order.customer_id == user.id:
        return True
    tailor = tailor_for_user(user)
    return bool(tailor and order.assigned_tailor_id == tailor.id)


def _check_status_domain(new_status):
    if new_status not in CustomOrder.Status.values:
        raise ValidationError({"status": f"Invalid status '{new_status}'."})


def update_status(order_id, new_status, user) -> CustomOrder:
    """Change a CustomOrder's status on behalf of ``user``.

    Raises NotFound, PermissionDenied (not the assigned tailor),
    ValidationError (unknown status) or InvalidTransition (move not in the
    table). Ownership is checked before the status value.
    """
    order = get_custom_order(order_id)

    if is_admin(user):
        _check_status_domain(new_status)
        order.status = new_status
        order.save(update_fields=["status", "updated_at"])
        logger.info(
            "Admin %s set CustomOrder %s status to %s", user.id, order.id, new_status
        )
        return order

    tailor = tailor_for_user(user)
    if tailor is None or order.assigned_tailor_id != tailor.id:
        raise PermissionDenied("Not assigned to this order.")

    _check_status_domain(new_status)
    current = order.status
    ensure_transition(current, new_status)

    updated = CustomOrder.objects.filter(pk=order.pk, status=current).update(
        status=new_status, updated_at=timezone.now()
    )
    if not updated:
        order.refresh_from_db(fields=["status"])
        logger.warning(
            "CustomOrder %s changed concurrently (%s -> %s lost against %s)",
            order.id, current, new_status, order.status,
        )
        raise InvalidTransition(order.status, new_status)

    order.refresh_from_db()
    logger.info(
        "Tailor %s moved CustomOrder %s from %s to %s", tailor.id, order.id, current, new_status
    )
    return order

"""Assignment engine.

Creates and updates the binding between an order ``(source, id)`` and a
tailor. The ``OrderAssignment`` row is the single authoritative record; for
sources that support it (see ``orders.sources.SOURCE_CAPABILITIES``) the
binding is projected onto the order row by ``sync_order_mirror`` after every
successful assignment write. The projection is idempotent and can be re-run
at any time; a failing projection never undoes the assignment.
"""

import logging

from django.db import DatabaseError
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from common.exceptions import DependencyFailure
from orders.models import CustomOrder
from orders.sources import capabilities_for, is_valid_source, order_exists, resolve_order
from orders.transitions import ACTIVE_STATUSES, TERMINAL_STATUSES, can_transition
from profiles.roles import is_admin
from tailors.models import Tailor
from tailors.services import tailor_for_user

from .models import OrderAssignment

logger = logging.getLogger(__name__)

A = OrderAssignment.Status

# Statuses a tailor may set on their own assignment. No transition table is
# enforced at this level.
TAILOR_SETTABLE_STATUSES = (
    A.ASSIGNED.value,
    A.ACCEPTED.value,
    A.IN_PROGRESS.value,
    A.COMPLETED.value,
    A.REJECTED.value,
)

# Assignment statuses that exist verbatim in the CustomOrder status domain.
MIRRORED_STATUSES = (
    A.ASSIGNED.value,
    A.ACCEPTED.value,
    A.IN_PROGRESS.value,
    A.COMPLETED.value,
)


# ----------------------------- mirror -----------------------------

def _mirror_fields(assignment: OrderAssignment, current: str, enforce_transitions: bool) -> dict:
    """Fields to write on an order currently in ``current``.

    The tailor binding always follows the assignment. The status follows it
    only when the order is not finished and, if ``enforce_transitions`` is set,
    the transition table allows the move.
    """
    if assignment.status in MIRRORED_STATUSES:
        fields = {
            "assigned_tailor_id": assignment.tailor_id,
            "assigned_at": assignment.assigned_at,
        }
        target = assignment.status
        if current in TERMINAL_STATUSES or target == current:
            return fields
        if enforce_transitions and not can_transition(current, target):
            return fields
        fields["status"] = target
        return fields
    # rejected / unassigned: an order still in the workflow goes back to the pool.
    if current not in ACTIVE_STATUSES:
        return {}
    return {
        "assigned_tailor_id": None,
        "assigned_at": None,
        "status": CustomOrder.Status.PENDING.value,
    }


def sync_order_mirror(assignment: OrderAssignment, enforce_transitions: bool = False) -> bool:
    """Project ``assignment`` onto its order row. Returns True if a row was written."""
    if not capabilities_for(assignment.order_source).mirrors_assignment:
        return False
    current = (
        CustomOrder.objects.filter(pk=assignment.order_id)
        .values_list("status", flat=True)
        .first()
    )
    if current is None:
        return False
    fields = _mirror_fields(assignment, current, enforce_transitions)
    if not fields:
        return False
    updated = CustomOrder.objects.filter(pk=assignment.order_id, status=current).update(
        updated_at=timezone.now(), **fields
    )
    if not updated:
        logger.warning(
            "Order %s changed status during mirror sync of assignment %s",
            assignment.order_id, assignment.id,
        )
    return bool(updated)


def try_sync_order_mirror(assignment: OrderAssignment, enforce_transitions: bool = False) -> bool:
    """Run the mirror step, logging instead of raising on database errors."""
    try:
        return sync_order_mirror(assignment, enforce_transitions)
    except DatabaseError:
        logger.exception(
            "Mirror sync failed for assignment %s (%s:%s); retry via the sync endpoint",
            assignment.id, assignment.order_source, assignment.order_id,
        )
        return False


# ----------------------------- writes -----------------------------

def _require_admin(user):
    if not is_admin(user):
        raise PermissionDenied("Admin only.")


def _parse_id(value, field):
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError({field: "Must be an integer."})
    if parsed < 1:
        raise ValidationError({field: "Must be a positive integer."})
    return parsed


def assign(source, order_id, tailor_id, user):
    """Bind ``(source, order_id)`` to ``tailor_id``; returns (assignment, mirrored).

    Re-assigning an order overwrites the previous binding.
    """
    _require_admin(user)
    if not source or order_id in (None, "") or tailor_id in (None, ""):
        raise ValidationError("orderSource, orderId, tailorId are required.")
    if not is_valid_source(source):
        raise ValidationError({"orderSource": "Invalid orderSource."})
    order_id = _parse_id(order_id, "orderId")
    tailor_id = _parse_id(tailor_id, "tailorId")

    tailor = Tailor.objects.filter(pk=tailor_id).first()
    if tailor is None or not tailor.is_active:
        raise ValidationError({"tailorId": "Invalid or inactive tailor."})
    if not order_exists(source, order_id):
        raise NotFound("Order not found.")

    assignment, created = OrderAssignment.objects.update_or_create(
        order_source=source,
        order_id=order_id,
        defaults={
            "tailor": tailor,
            "status": A.ASSIGNED,
            "assigned_at": timezone.now(),
        },
    )
    mirrored = try_sync_order_mirror(assignment)
    logger.info(
        "Admin %s %s %s:%s to tailor %s (mirrored=%s)",
        user.id, "assigned" if created else "re-assigned", source, order_id, tailor.id, mirrored,
    )
    return assignment, mirrored


def get_assignment(assignment_id) -> OrderAssignment:
    try:
        return OrderAssignment.objects.select_related("tailor").get(pk=assignment_id)
    except OrderAssignment.DoesNotExist:
        raise NotFound("Assignment not found.")


def update_assignment_status(assignment_id, new_status, user):
    """Set an assignment's status; returns (assignment, mirrored).

    Admins may set any status of the assignment domain. Otherwise the caller
    must own the assigned tailor profile and pick a tailor-settable status.
    A tailor's change reaches the order status only along the order
    transition table; an admin's change is mirrored as is. Finished orders
    never move.
    """
    assignment = get_assignment(assignment_id)

    if is_admin(user):
        if new_status not in A.values:
            raise ValidationError({"status": "Invalid status."})
    else:
        tailor = tailor_for_user(user)
        if tailor is None or tailor.id != assignment.tailor_id:
            raise PermissionDenied("Not allowed.")
        if new_status not in TAILOR_SETTABLE_STATUSES:
            raise ValidationError({"status": "Invalid status."})

    previous = assignment.status
    assignment.status = new_status
    assignment.save(update_fields=["status", "updated_at"])
    mirrored = try_sync_order_mirror(assignment, enforce_transitions=not is_admin(user))
    logger.info(
        "User %s moved assignment %s from %s to %s (mirrored=%s)",
        user.id, assignment.id, previous, new_status, mirrored,
    )
    return assignment, mirrored


def resync(assignment_id, user) -> bool:
    """Re-run the mirror for one assignment; DependencyFailure on database errors."""
    _require_admin(user)
    assignment = get_assignment(assignment_id)
    try:
        return sync_order_mirror(assignment)
    except DatabaseError as exc:
        logger.exception("Manual mirror sync failed for assignment %s", assignment.id)
        raise DependencyFailure("Mirror sync failed; retry later.") from exc


# ----------------------------- reads -----------------------------

def with_order(assignments):
    """Pair every assignment with its resolved order view (None if deleted)."""
    return [(a, resolve_order(a.order_source, a.order_id)) for a in assignments]


def list_for_tailor(user):
    """Assignments of the caller's tailor profile; deleted orders are dropped."""
    tailor = tailor_for_user(user)
    if tailor is None:
        raise PermissionDenied("No tailor profile.")
    qs = OrderAssignment.objects.filter(tailor=tailor).select_related("tailor")
    return [(a, order) for a, order in with_order(qs) if order is not None]


def _tailor_summary(tailor_id):
    t = Tailor.objects.filter(pk=tailor_id).values("id", "name", "user_id", "is_active").first()
    if t is None:
        return None
    return {"id": t["id"], "name": t["name"], "userId": t["user_id"], "isActive": t["is_active"]}


def list_grouped_by_tailor(assignments):
    """Group assignments by tailor, fetching each tailor summary once."""
    groups = {}
    for assignment, order in with_order(assignments):
        group = groups.get(assignment.tailor_id)
        if group is None:
            group = {
                "tailorId": assignment.tailor_id,
                "tailor": _tailor_summary(assignment.tailor_id),
                "assignments": [],
            }
            groups[assignment.tailor_id] = group
        group["assignments"].append((assignment, order))
    return list(groups.values())


def get_for_order(source, order_id):
    """Return (assignment, order view) for one order, or (None, None)."""
    if not source or order_id in (None, ""):
        raise ValidationError("orderSource and orderId are required.")
    if not is_valid_source(source):
        raise ValidationError({"orderSource": "Invalid orderSource."})
    order_id = _parse_id(order_id, "orderId")
    assignment = (
        OrderAssignment.objects.select_related("tailor")
        .filter(order_source=source, order_id=order_id)
        .first()
    )
    if assignment is None:
        return None, None
    return assignment, resolve_order(assignment.order_source, assignment.order_id)


def can_view_assignment(user, assignment: OrderAssignment) -> bool:
    if is_admin(user):
        return True
    tailor = tailor_for_user(user)
    return bool(tailor and tailor.id == assignment.tailor_id)


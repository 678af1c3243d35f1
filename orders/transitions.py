"""CustomOrder status state machine.

``ALLOWED_TRANSITIONS`` is the single source of truth for what a non-admin
actor may do to a CustomOrder's status. ``cancelled`` has no entry:
it is reachable only through the admin override.
"""

from common.exceptions import InvalidTransition

from .models import CustomOrder

S = CustomOrder.Status

ALLOWED_TRANSITIONS = {
    S.PENDING.value: (S.ASSIGNED.value,),
    S.ASSIGNED.value: (S.ACCEPTED.value,),
    S.ACCEPTED.value: (S.IN_PROGRESS.value,),
    S.IN_PROGRESS.value: (S.COMPLETED.value,),
    S.COMPLETED.value: (S.DELIVERED.value,),
}

TERMINAL_STATUSES = frozenset({S.DELIVERED.value, S.CANCELLED.value})

# Statuses in which an order still occupies its tailor.
ACTIVE_STATUSES = (S.PENDING.value, S.ASSIGNED.value, S.ACCEPTED.value, S.IN_PROGRESS.value)


def allowed_next(current) -> tuple:
    return ALLOWED_TRANSITIONS.get(current, ())


def can_transition(current, requested) -> bool:
    return requested in allowed_next(current)


def ensure_transition(current, requested):
    """Raise InvalidTransition unless ``current -> requested`` is in the table."""
    if not can_transition(current, requested):
        raise InvalidTransition(current, requested)

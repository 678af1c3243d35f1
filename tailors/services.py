"""Tailor directory operations.

Besides profile lookup and registration this module computes the derived
``busy`` attribute: a tailor is busy when more than ``TAILOR_BUSY_THRESHOLD``
orders are still active for them. Orders are counted once per
``(source, id)`` whether they are bound through the CustomOrder field or
through an OrderAssignment.
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from assignments.models import OrderAssignment
from orders.models import CustomOrder, OrderSource
from orders.transitions import ACTIVE_STATUSES
from profiles.models import Profile

from .models import Tailor

logger = logging.getLogger(__name__)

User = get_user_model()

# Assignment statuses that still occupy the tailor.
ACTIVE_ASSIGNMENT_STATUSES = ("assigned", "accepted", "in_progress")


def tailor_for_user(user):
    """Return the Tailor profile owned by ``user`` or None."""
    if not user or not user.is_authenticated:
        return None
    return Tailor.objects.filter(user_id=user.id).first()


def active_order_count(tailor: Tailor) -> int:
    assigned_custom_ids = OrderAssignment.objects.filter(
        tailor=tailor, order_source=OrderSource.CUSTOM_ORDER, status__in=ACTIVE_ASSIGNMENT_STATUSES
    ).values_list("order_id", flat=True)
    custom_ids = set(
        CustomOrder.objects.filter(status__in=ACTIVE_STATUSES)
        .filter(assigned_tailor=tailor)
        .values_list("id", flat=True)
    )
    custom_ids |= set(
        CustomOrder.objects.filter(status__in=ACTIVE_STATUSES, id__in=list(assigned_custom_ids))
        .values_list("id", flat=True)
    )
    cloth_ids = set(
        OrderAssignment.objects.filter(
            tailor=tailor,
            order_source=OrderSource.CLOTH_CUSTOMIZER,
            status__in=ACTIVE_ASSIGNMENT_STATUSES,
        ).values_list("order_id", flat=True)
    )
    return len(custom_ids) + len(cloth_ids)


def is_busy(count: int) -> bool:
    return count > settings.TAILOR_BUSY_THRESHOLD


def stats_for(tailor: Tailor) -> dict:
    count = active_order_count(tailor)
    return {"activeOrderCount": count, "busy": is_busy(count)}


def register_tailor(user, data: dict):
    """Create or update the caller's Tailor profile; returns (tailor, created).

    Re-registering always reactivates the profile.
    """
    fields = {
        "name": data["name"],
        "phone": data.get("phone", ""),
        "skills": list(data.get("skills") or []),
        "payout_email": data.get("payout_email", ""),
        "is_active": True,
    }
    with transaction.atomic():
        tailor, created = Tailor.objects.update_or_create(user=user, defaults=fields)
        Profile.objects.get_or_create(user=user, defaults={"type": Profile.Type.TAILOR})
    logger.info("%s tailor %s for user %s", "Registered" if created else "Updated", tailor.id, user.id)
    return tailor, created


def sync_tailors_from_users() -> dict:
    """Ensure every user with profile type 'tailor' has an active Tailor record."""
    created = updated = 0
    users = User.objects.filter(profile__type=Profile.Type.TAILOR).order_by("id")
    for user in users:
        tailor = Tailor.objects.filter(user=user).first()
        if tailor is None:
            Tailor.objects.create(user=user, name=user.username or "Tailor", is_active=True)
            created += 1
            continue
        dirty = []
        if not tailor.name and user.username:
            tailor.name = user.username
            dirty.append("name")
        if not tailor.is_active:
            tailor.is_active = True
            dirty.append("is_active")
        if dirty:
            tailor.save(update_fields=dirty + ["updated_at"])
            updated += 1
    total = Tailor.objects.count()
    logger.info("Tailor sync: created=%s updated=%s total=%s", created, updated, total)
    return {"created": created, "updated": updated, "total": total}

"""Assignments app models.

``OrderAssignment`` is the authoritative binding between an order and a
tailor. It is keyed on ``(order_source, order_id)`` so at most one assignment
exists per order; re-assigning overwrites it and keeps no history.
"""

from django.db import models
from django.utils import timezone

from orders.models import OrderSource
from tailors.models import Tailor


class OrderAssignment(models.Model):
    """Binds one order (from either source) to one tailor."""

    class Status(models.TextChoices):
        UNASSIGNED = "unassigned", "unassigned"
        ASSIGNED = "assigned", "assigned"
        ACCEPTED = "accepted", "accepted"
        IN_PROGRESS = "in_progress", "in_progress"
        COMPLETED = "completed", "completed"
        REJECTED = "rejected", "rejected"

    order_source = models.CharField(max_length=20, choices=OrderSource.choices)
    order_id = models.PositiveBigIntegerField(db_index=True)
    tailor = models.ForeignKey(
        Tailor,
        on_delete=models.PROTECT,
        related_name="assignments",
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.ASSIGNED, db_index=True
    )
    assigned_at = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["order_source", "order_id"], name="uniq_assignment_per_order"
            ),
        ]

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"OrderAssignment<{self.order_source}:{self.order_id} -> {self.tailor_id} {self.status}>"

"""Orders app models.

Orders come from two physical sources with different capabilities:

- ``CustomOrder``: a customer-authored design order with its own multi-state
  status and a mirrored assigned tailor.
- ``ClothCustomizer``: a design saved by the garment design tool. It has no
  status column; once assigned it is treated as ``assigned``.

Ids are only unique per table, so the assignment subsystem always refers to an
order by ``(OrderSource, id)``.
"""

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from tailors.models import Tailor


class OrderSource(models.TextChoices):
    """Physical table an order lives in."""

    CUSTOM_ORDER = "CustomOrder", "CustomOrder"
    CLOTH_CUSTOMIZER = "ClothCustomizer", "ClothCustomizer"


class CustomOrder(models.Model):
    """A customer-authored customization order routed to a tailor."""

    class Status(models.TextChoices):
        PENDING = "pending", "pending"
        ASSIGNED = "assigned", "assigned"
        ACCEPTED = "accepted", "accepted"
        IN_PROGRESS = "in_progress", "in_progress"
        COMPLETED = "completed", "completed"
        DELIVERED = "delivered", "delivered"
        CANCELLED = "cancelled", "cancelled"

    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="custom_orders",
    )
    # clothingType, size, color, quantity, notes
    config = models.JSONField(default=dict)
    design = models.JSONField(default=dict, blank=True)
    measurements = models.JSONField(default=dict, blank=True)
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True
    )
    assigned_tailor = models.ForeignKey(
        Tailor,
        on_delete=models.SET_NULL,
        related_name="custom_orders",
        null=True,
        blank=True,
    )
    assigned_at = models.DateTimeField(null=True, blank=True)
    preview_gallery = models.JSONField(default=list, blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    payout_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    paid_out_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"CustomOrder<{self.id} {self.status}>"


class ClothCustomizer(models.Model):
    """A garment design saved by the design tool; the second order source."""

    class Size(models.TextChoices):
        S = "S", "S"
        M = "M", "M"
        L = "L", "L"
        XL = "XL", "XL"
        XXL = "XXL", "XXL"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="cloth_designs",
    )
    clothing_type = models.CharField(
        max_length=20, choices=[("tshirt", "tshirt")], default="tshirt"
    )
    nickname = models.CharField(max_length=50, blank=True, default="My Custom T-Shirt")
    color = models.CharField(max_length=50)
    selected_design = models.JSONField(default=dict, blank=True)
    placed_designs = models.JSONField(default=list, blank=True)
    size = models.CharField(max_length=5, choices=Size.choices)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    total_price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(0)]
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"ClothCustomizer<{self.id} {self.nickname}>"

"""Inventory app models.

``ClothingItem.stock`` is only decremented through the guarded update in
``inventory.services``. ``InventoryAdjustment`` is the ledger entry for the
stock owed by one payment; each of its lines records whether its own
decrement has already landed so a retry never decrements a line twice.
"""

from django.core.validators import MinValueValidator
from django.db import models


class ClothingItem(models.Model):
    """An outlet product with a whole-unit stock counter."""

    class Status(models.TextChoices):
        ACTIVE = "active", "active"
        ARCHIVED = "archived", "archived"
        DRAFT = "draft", "draft"

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    sku = models.CharField(max_length=100, blank=True, default="", db_index=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    stock = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self):
        return f"{self.name} ({self.stock} in stock)"


class InventoryAdjustment(models.Model):
    """Stock decrement owed for one payment; applied at most once."""

    class Status(models.TextChoices):
        PENDING = "pending", "pending"
        APPLYING = "applying", "applying"
        APPLIED = "applied", "applied"
        FAILED = "failed", "failed"

    class Source(models.TextChoices):
        OUTLET = "outlet", "outlet"

    payment_id = models.CharField(max_length=100, unique=True)
    source = models.CharField(max_length=20, choices=Source.choices, default=Source.OUTLET, db_index=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)
    applied_at = models.DateTimeField(null=True, blank=True)
    # Set while a caller holds the application claim.
    claimed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"InventoryAdjustment<{self.payment_id} {self.status}>"


class InventoryAdjustmentLine(models.Model):
    """One ``{item, quantity}`` entry of an adjustment and its outcome."""

    adjustment = models.ForeignKey(
        InventoryAdjustment,
        on_delete=models.CASCADE,
        related_name="lines",
    )
    # No FK constraint: a line may reference an item that no longer exists and
    # must then fail at apply time instead of at creation.
    item = models.ForeignKey(
        ClothingItem,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="+",
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    decremented = models.BooleanField(default=False)
    decremented_at = models.DateTimeField(null=True, blank=True)
    failure_reason = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.item_id} x{self.quantity}{' (done)' if self.decremented else ''}"

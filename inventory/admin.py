from django.contrib import admin

from .models import ClothingItem, InventoryAdjustment, InventoryAdjustmentLine


@admin.register(ClothingItem)
class ClothingItemAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "sku", "price", "stock", "status", "updated_at")
    list_filter = ("status",)
    search_fields = ("name", "sku")


class InventoryAdjustmentLineInline(admin.TabularInline):
    model = InventoryAdjustmentLine
    extra = 0
    fields = ("item_id", "quantity", "decremented", "decremented_at", "failure_reason")
    readonly_fields = fields
    can_delete = False


@admin.register(InventoryAdjustment)
class InventoryAdjustmentAdmin(admin.ModelAdmin):
    """Adjustments are written by the reconciler; the admin only inspects them."""

    list_display = ("id", "payment_id", "source", "status", "applied_at", "created_at")
    list_filter = ("status", "source")
    search_fields = ("payment_id",)
    readonly_fields = ("payment_id", "source", "status", "applied_at", "claimed_at", "created_at", "updated_at")
    inlines = [InventoryAdjustmentLineInline]

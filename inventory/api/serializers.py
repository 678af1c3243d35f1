"""Inventory API serializers (camelCase on the wire)."""

from rest_framework import serializers

from ..models import ClothingItem, InventoryAdjustment, InventoryAdjustmentLine


class AdjustmentItemInputSerializer(serializers.Serializer):
    itemId = serializers.IntegerField(min_value=1, source="item_id")
    quantity = serializers.IntegerField(min_value=1)


class AdjustmentCreateSerializer(serializers.Serializer):
    """Body of POST /api/inventory/adjustments/."""

    paymentId = serializers.CharField(max_length=100, source="payment_id")
    source = serializers.ChoiceField(
        choices=InventoryAdjustment.Source.choices,
        default=InventoryAdjustment.Source.OUTLET,
    )
    items = AdjustmentItemInputSerializer(many=True, allow_empty=False)


class AdjustmentApplySerializer(serializers.Serializer):
    """Body of POST /api/inventory/adjustments/apply/; ``timeout`` is in seconds."""

    paymentId = serializers.CharField(max_length=100, source="payment_id")
    timeout = serializers.FloatField(min_value=0.001, required=False)


class AdjustmentLineSerializer(serializers.ModelSerializer):
    itemId = serializers.IntegerField(source="item_id")
    decrementedAt = serializers.DateTimeField(source="decremented_at")
    failureReason = serializers.CharField(source="failure_reason")

    class Meta:
        model = InventoryAdjustmentLine
        fields = ["itemId", "quantity", "decremented", "decrementedAt", "failureReason"]


class InventoryAdjustmentSerializer(serializers.ModelSerializer):
    paymentId = serializers.CharField(source="payment_id")
    appliedAt = serializers.DateTimeField(source="applied_at")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
    items = AdjustmentLineSerializer(source="lines", many=True, read_only=True)

    class Meta:
        model = InventoryAdjustment
        fields = ["id", "paymentId", "source", "status", "appliedAt", "createdAt", "updatedAt", "items"]


class ClothingItemSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = ClothingItem
        fields = ["id", "name", "description", "sku", "price", "stock", "status", "createdAt", "updatedAt"]

"""Orders API serializers.

Input/output serializers for custom orders and cloth-customizer designs, and
the status patch serializer. JSON keys are camelCase; model fields are
snake_case.
"""

from rest_framework import serializers

from orders.models import ClothCustomizer, CustomOrder


class OrderConfigSerializer(serializers.Serializer):
    """Structured configuration of a custom order."""

    clothingType = serializers.CharField(max_length=50)
    size = serializers.CharField(max_length=20)
    color = serializers.CharField(max_length=50)
    quantity = serializers.IntegerField(min_value=1, default=1)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class CustomOrderCreateSerializer(serializers.Serializer):
    """Input serializer for POST /api/custom-orders/."""

    config = OrderConfigSerializer()
    design = serializers.JSONField(required=False, default=dict)
    measurements = serializers.DictField(child=serializers.FloatField(), required=False, default=dict)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True)
    previewGallery = serializers.ListField(child=serializers.CharField(), required=False, default=list)

    def validate_design(self, value):
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise serializers.ValidationError("Must be an object.")
        return value

    def create(self, validated_data):
        request = self.context["request"]
        return CustomOrder.objects.create(
            customer=request.user,
            config=dict(validated_data["config"]),
            design=validated_data.get("design") or {},
            measurements=validated_data.get("measurements") or {},
            price=validated_data.get("price"),
            preview_gallery=validated_data.get("previewGallery") or [],
            status=CustomOrder.Status.PENDING,
        )


class TailorSummaryField(serializers.Field):
    def to_representation(self, tailor):
        return {"id": tailor.id, "name": tailor.name, "isActive": tailor.is_active}


class CustomOrderOutputSerializer(serializers.ModelSerializer):
    """Read serializer for returning a complete custom order."""

    customerId = serializers.IntegerField(source="customer_id", read_only=True)
    assignedTailor = TailorSummaryField(source="assigned_tailor", read_only=True)
    assignedAt = serializers.DateTimeField(source="assigned_at", read_only=True)
    previewGallery = serializers.JSONField(source="preview_gallery", read_only=True)
    payoutAmount = serializers.DecimalField(source="payout_amount", max_digits=10, decimal_places=2, read_only=True)
    paidOutAt = serializers.DateTimeField(source="paid_out_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = CustomOrder
        fields = [
            "id",
            "customerId",
            "config",
            "design",
            "measurements",
            "status",
            "assignedTailor",
            "assignedAt",
            "price",
            "payoutAmount",
            "paidOutAt",
            "previewGallery",
            "createdAt",
            "updatedAt",
        ]


class OrderStatusPatchSerializer(serializers.Serializer):
    """Patch serializer used to update only the order status."""

    status = serializers.CharField()


class ClothCustomizerSerializer(serializers.ModelSerializer):
    """Create/read serializer for designs saved by the design tool."""

    userId = serializers.IntegerField(source="user_id", read_only=True)
    clothingType = serializers.ChoiceField(source="clothing_type", choices=[("tshirt", "tshirt")], default="tshirt")
    selectedDesign = serializers.JSONField(source="selected_design", required=False, default=dict)
    placedDesigns = serializers.ListField(
        source="placed_designs", child=serializers.DictField(), required=False, default=list
    )
    totalPrice = serializers.DecimalField(source="total_price", max_digits=10, decimal_places=2, min_value=0)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = ClothCustomizer
        fields = [
            "id",
            "userId",
            "clothingType",
            "nickname",
            "color",
            "selectedDesign",
            "placedDesigns",
            "size",
            "quantity",
            "totalPrice",
            "createdAt",
        ]

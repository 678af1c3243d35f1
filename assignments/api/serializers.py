"""Assignments API serializers.

Input serializers for assigning an order and patching an assignment status,
and the output serializer rendering an assignment with camelCase keys.
"""

from rest_framework import serializers

from orders.models import OrderSource
from ..models import OrderAssignment


class AssignInputSerializer(serializers.Serializer):
    """Body of POST /api/order-assignments/assign/."""

    orderSource = serializers.ChoiceField(choices=OrderSource.choices)
    orderId = serializers.IntegerField(min_value=1)
    tailorId = serializers.IntegerField(min_value=1)


class AssignmentStatusPatchSerializer(serializers.Serializer):
    """Body of PATCH /api/order-assignments/{id}/status/; only 'status' is accepted."""

    status = serializers.CharField()

    def validate(self, attrs):
        extra = set(self.initial_data.keys()) - {"status"}
        if extra:
            raise serializers.ValidationError(
                f"Only 'status' may be updated. Invalid fields: {', '.join(sorted(extra))}."
            )
        return attrs


class OrderAssignmentSerializer(serializers.ModelSerializer):
    """Read representation of an assignment."""

    orderSource = serializers.CharField(source="order_source")
    orderId = serializers.IntegerField(source="order_id")
    tailorId = serializers.IntegerField(source="tailor_id")
    tailorName = serializers.CharField(source="tailor.name", read_only=True)
    assignedAt = serializers.DateTimeField(source="assigned_at")
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")

    class Meta:
        model = OrderAssignment
        fields = [
            "id",
            "orderSource",
            "orderId",
            "tailorId",
            "tailorName",
            "status",
            "assignedAt",
            "createdAt",
            "updatedAt",
        ]


def assignment_with_order(assignment, order):
    """Render one ``{assignment, order}`` pair."""
    return {"assignment": OrderAssignmentSerializer(assignment).data, "order": order}

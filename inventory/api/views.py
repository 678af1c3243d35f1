"""Inventory API views.

The payment flow records an adjustment when a payment is confirmed and asks
for it to be applied; both calls are idempotent per ``paymentId``.
"""

from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from common.api.permissions import IsAdmin
from common.api.responses import ok, ok_list
from inventory import services
from inventory.models import ClothingItem
from .serializers import (
    AdjustmentApplySerializer,
    AdjustmentCreateSerializer,
    ClothingItemSerializer,
    InventoryAdjustmentSerializer,
)


class AdjustmentCreateView(APIView):
    """POST /api/inventory/adjustments/ -> record a pending adjustment."""

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = AdjustmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        adjustment, created = services.create_pending(data["payment_id"], data["items"], data["source"])
        payload = {"id": adjustment.id, "status": adjustment.status}
        if not created:
            payload["duplicate"] = True
            return ok(payload, message="Adjustment already exists for this paymentId")
        return ok(payload, message="Adjustment created", status=status.HTTP_201_CREATED)


class AdjustmentApplyView(APIView):
    """POST /api/inventory/adjustments/apply/ -> decrement stock once per payment."""

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = AdjustmentApplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = services.apply_by_payment(data["payment_id"], timeout=data.get("timeout"))
        return ok(result)


class AdjustmentDetailView(APIView):
    """GET /api/inventory/adjustments/{paymentId}/ (admin)."""

    permission_classes = [IsAuthenticated, IsAdmin]

    def get(self, request, payment_id):
        adjustment = services.get_adjustment(payment_id)
        return ok(InventoryAdjustmentSerializer(adjustment).data)


class ClothingItemListView(generics.ListAPIView):
    """GET /api/inventory/items/ (admin)."""

    permission_classes = [IsAuthenticated, IsAdmin]
    queryset = ClothingItem.objects.all()
    serializer_class = ClothingItemSerializer
    filterset_fields = ["status"]

    def list(self, request, *args, **kwargs):
        qs = self.filter_queryset(self.get_queryset())
        return ok_list(self.get_serializer(qs, many=True).data)

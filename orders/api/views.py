"""Orders API views.

Custom orders: customers create and list their own orders, admins list all
orders, tailors list orders assigned to them, and tailors/admins move an
order through its status workflow. Cloth-customizer designs can be saved and
listed as the second order source.
"""

from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from common.api.permissions import IsAdmin
from common.api.responses import ok, ok_list
from orders.models import ClothCustomizer, CustomOrder
from orders.services import update_status
from tailors.services import tailor_for_user
from .filters import CustomOrderFilter
from .permissions import CanViewCustomOrder
from .serializers import (
    ClothCustomizerSerializer,
    CustomOrderCreateSerializer,
    CustomOrderOutputSerializer,
    OrderStatusPatchSerializer,
)


# ----------------------------- helpers (module-level) -----------------------------

def _validate_patch_only_status(data):
    """Allow only 'status' in the PATCH body."""
    extra = set(data.keys()) - {"status"}
    if extra:
        raise ValidationError(
            f"Only 'status' may be updated. Invalid fields: {', '.join(sorted(extra))}."
        )


def _serialize_orders(qs):
    return CustomOrderOutputSerializer(qs, many=True).data


# --------------------------------------- views ---------------------------------------

class CustomOrderListCreateAPIView(generics.ListCreateAPIView):
    """GET: list all orders with filters status/tailorId (admin).
    POST: create a new custom order for the authenticated customer.
    """

    queryset = CustomOrder.objects.select_related("customer", "assigned_tailor")
    serializer_class = CustomOrderOutputSerializer
    filterset_class = CustomOrderFilter

    def get_permissions(self):
        """Admin-only on GET, otherwise just authenticated."""
        if self.request.method == "GET":
            return [IsAuthenticated(), IsAdmin()]
        return [IsAuthenticated()]

    def list(self, request, *args, **kwargs):
        return ok_list(_serialize_orders(self.filter_queryset(self.get_queryset())))

    def create(self, request, *args, **kwargs):
        serializer = CustomOrderCreateSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        order = serializer.save()
        return ok(
            CustomOrderOutputSerializer(order).data,
            message="Order created",
            status=status.HTTP_201_CREATED,
        )


class MyCustomOrdersAPIView(APIView):
    """GET /api/custom-orders/mine/ -> orders placed by the caller."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        qs = CustomOrder.objects.filter(customer=request.user).select_related("assigned_tailor")
        return ok_list(_serialize_orders(qs))


class AssignedCustomOrdersAPIView(APIView):
    """GET /api/custom-orders/assigned/ -> orders whose assigned tailor is the caller."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        tailor = tailor_for_user(request.user)
        if tailor is None:
            raise PermissionDenied("No tailor profile.")
        qs = CustomOrder.objects.filter(assigned_tailor=tailor).select_related("assigned_tailor")
        return ok_list(_serialize_orders(qs))


class CustomOrderDetailAPIView(generics.RetrieveAPIView):
    """GET /api/custom-orders/{id}/ -> one order (admin, owner or assigned tailor)."""

    queryset = CustomOrder.objects.select_related("customer", "assigned_tailor")
    permission_classes = [IsAuthenticated, CanViewCustomOrder]

    def retrieve(self, request, *args, **kwargs):
        order = get_object_or_404(self.get_queryset(), pk=kwargs["pk"])
        self.check_object_permissions(request, order)
        return ok(CustomOrderOutputSerializer(order).data)


class CustomOrderStatusAPIView(APIView):
    """PATCH /api/custom-orders/{id}/status/ -> guarded status transition."""

    permission_classes = [IsAuthenticated]

    def patch(self, request, pk: int):
        _validate_patch_only_status(request.data)
        serializer = OrderStatusPatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = update_status(pk, serializer.validated_data["status"], request.user)
        return ok(CustomOrderOutputSerializer(order).data)


class ClothCustomizerListCreateAPIView(generics.ListCreateAPIView):
    """GET: list all saved designs (admin). POST: save a design for the caller."""

    queryset = ClothCustomizer.objects.select_related("user")
    serializer_class = ClothCustomizerSerializer

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAuthenticated(), IsAdmin()]
        return [IsAuthenticated()]

    def list(self, request, *args, **kwargs):
        return ok_list(self.get_serializer(self.get_queryset(), many=True).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        design = serializer.save(user=request.user)
        return ok(
            ClothCustomizerSerializer(design).data,
            message="Design saved",
            status=status.HTTP_201_CREATED,
        )


class MyClothCustomizerAPIView(APIView):
    """GET /api/cloth-customizer/mine/ -> designs saved by the caller."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        qs = ClothCustomizer.objects.filter(user=request.user)
        return ok_list(ClothCustomizerSerializer(qs, many=True).data)

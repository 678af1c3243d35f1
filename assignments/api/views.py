"""Assignments API views.

Admin endpoints assign orders and list assignments (flat, grouped by tailor or
by order); tailors list their own assignments; tailors and admins update an
assignment's status. The engine itself lives in ``assignments.services``.
"""

from rest_framework import generics
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from common.api.permissions import IsAdmin
from common.api.responses import ok, ok_list
from assignments import services
from assignments.models import OrderAssignment
from .filters import OrderAssignmentFilter
from .serializers import (
    AssignInputSerializer,
    AssignmentStatusPatchSerializer,
    OrderAssignmentSerializer,
    assignment_with_order,
)


class AssignView(APIView):
    """POST /api/order-assignments/assign/ -> bind an order to an active tailor (admin)."""

    permission_classes = [IsAuthenticated, IsAdmin]

    def post(self, request):
        serializer = AssignInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        assignment, mirrored = services.assign(
            data["orderSource"], data["orderId"], data["tailorId"], request.user
        )
        payload = OrderAssignmentSerializer(assignment).data
        payload["mirrored"] = mirrored
        return ok(payload, message="Order assigned")


class AssignmentListView(generics.ListAPIView):
    """GET /api/order-assignments/?status=&tailorId=&orderSource= (admin)."""

    permission_classes = [IsAuthenticated, IsAdmin]
    queryset = OrderAssignment.objects.select_related("tailor")
    filterset_class = OrderAssignmentFilter

    def list(self, request, *args, **kwargs):
        qs = self.filter_queryset(self.get_queryset())
        return ok_list(assignment_with_order(a, o) for a, o in services.with_order(qs))


class AssignmentsByTailorView(generics.ListAPIView):
    """GET /api/order-assignments/by-tailor/ -> assignments grouped per tailor (admin)."""

    permission_classes = [IsAuthenticated, IsAdmin]
    queryset = OrderAssignment.objects.select_related("tailor")
    filterset_class = OrderAssignmentFilter

    def list(self, request, *args, **kwargs):
        qs = self.filter_queryset(self.get_queryset())
        groups = services.list_grouped_by_tailor(qs)
        for group in groups:
            group["assignments"] = [assignment_with_order(a, o) for a, o in group["assignments"]]
        return ok_list(groups)


class AssignmentByOrderView(APIView):
    """GET /api/order-assignments/by-order/?orderSource=&orderId= (admin)."""

    permission_classes = [IsAuthenticated, IsAdmin]

    def get(self, request):
        assignment, order = services.get_for_order(
            request.query_params.get("orderSource"), request.query_params.get("orderId")
        )
        if assignment is None:
            return ok(None)
        return ok(assignment_with_order(assignment, order))


class MyAssignmentsView(APIView):
    """GET /api/order-assignments/mine/ -> the caller's assignments with their orders."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        pairs = services.list_for_tailor(request.user)
        return ok_list(assignment_with_order(a, o) for a, o in pairs)


class AssignmentDetailView(APIView):
    """GET /api/order-assignments/{id}/ -> one assignment (admin or its tailor)."""

    permission_classes = [IsAuthenticated]

    def get(self, request, pk: int):
        assignment = services.get_assignment(pk)
        if not services.can_view_assignment(request.user, assignment):
            raise PermissionDenied("Not allowed.")
        order = services.resolve_order(assignment.order_source, assignment.order_id)
        return ok(assignment_with_order(assignment, order))


class AssignmentStatusView(APIView):
    """PATCH /api/order-assignments/{id}/status/ -> tailor or admin status update."""

    permission_classes = [IsAuthenticated]

    def patch(self, request, pk: int):
        serializer = AssignmentStatusPatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        assignment, mirrored = services.update_assignment_status(
            pk, serializer.validated_data["status"], request.user
        )
        payload = OrderAssignmentSerializer(assignment).data
        payload["mirrored"] = mirrored
        return ok(payload)


class AssignmentSyncView(APIView):
    """POST /api/order-assignments/{id}/sync/ -> re-run the order mirror (admin)."""

    permission_classes = [IsAuthenticated, IsAdmin]

    def post(self, request, pk: int):
        mirrored = services.resync(pk, request.user)
        return ok({"id": pk, "mirrored": mirrored})

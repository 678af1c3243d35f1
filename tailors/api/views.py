"""Tailors API views.

Tailors register (or re-register) themselves and read their own profile with
live workload stats; admins list every tailor with stats, edit or deactivate
a tailor, and sync tailor profiles from users tagged as tailors.
"""

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from common.api.permissions import IsAdmin
from common.api.responses import ok, ok_list
from tailors import services
from tailors.models import Tailor
from .serializers import TailorRegisterSerializer, TailorSerializer


def _with_stats(tailor):
    data = TailorSerializer(tailor).data
    data.update(services.stats_for(tailor))
    return data


class TailorRegisterView(APIView):
    """POST /api/tailors/register/ -> create or update the caller's tailor profile."""

    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = TailorRegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tailor, created = services.register_tailor(request.user, serializer.validated_data)
        return ok(
            TailorSerializer(tailor).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


class MyTailorProfileView(APIView):
    """GET /api/tailors/me/ -> caller's profile with activeOrderCount and busy."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        tailor = services.tailor_for_user(request.user)
        if tailor is None:
            raise NotFound("Tailor profile not found.")
        return ok(_with_stats(tailor))


class TailorListView(APIView):
    """GET /api/tailors/ -> every tailor with stats (admin)."""

    permission_classes = [IsAuthenticated, IsAdmin]

    def get(self, request):
        return ok_list(_with_stats(t) for t in Tailor.objects.all())


class TailorDetailView(APIView):
    """PATCH /api/tailors/{id}/ -> edit or deactivate a tailor (admin)."""

    permission_classes = [IsAuthenticated, IsAdmin]

    def patch(self, request, pk: int):
        tailor = get_object_or_404(Tailor, pk=pk)
        serializer = TailorSerializer(tailor, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        if not serializer.validated_data:
            raise ValidationError("No updatable fields provided.")
        serializer.save()
        return ok(_with_stats(tailor))


class TailorSyncView(APIView):
    """POST /api/tailors/sync/ -> create tailor profiles for users of type 'tailor' (admin)."""

    permission_classes = [IsAuthenticated, IsAdmin]

    def post(self, request):
        result = services.sync_tailors_from_users()
        return ok(result, message="Sync complete")

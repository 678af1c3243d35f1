"""Tailors API serializers."""

from rest_framework import serializers

from ..models import Tailor


class TailorRegisterSerializer(serializers.Serializer):
    """Body of POST /api/tailors/register/."""

    name = serializers.CharField(max_length=150)
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    skills = serializers.ListField(child=serializers.CharField(max_length=100), required=False, default=list)
    payoutEmail = serializers.EmailField(source="payout_email", required=False, allow_blank=True, default="")


class TailorSerializer(serializers.ModelSerializer):
    """Read/admin-edit representation of a tailor profile."""

    userId = serializers.IntegerField(source="user_id", read_only=True)
    isActive = serializers.BooleanField(source="is_active", required=False)
    payoutEmail = serializers.EmailField(source="payout_email", required=False, allow_blank=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Tailor
        fields = [
            "id",
            "userId",
            "name",
            "phone",
            "skills",
            "isActive",
            "rating",
            "payoutEmail",
            "createdAt",
            "updatedAt",
        ]

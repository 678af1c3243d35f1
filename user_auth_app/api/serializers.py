"""Auth API serializers.

Registration creates the user together with its role profile; login checks
credentials. Both views hand back the same bearer-token payload.
"""

from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from profiles.models import Profile

User = get_user_model()

# Admins are created through the Django admin, never self-registered.
SELF_REGISTRATION_TYPES = (
    Profile.Type.CUSTOMER,
    Profile.Type.TAILOR,
    Profile.Type.APPLICANT,
)

PROFILE_FIELDS = ("type", "tel", "address")


class RegistrationSerializer(serializers.Serializer):
    """New account plus its Profile. Usernames and emails are unique case-insensitively."""

    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6, trim_whitespace=False)
    repeated_password = serializers.CharField(write_only=True, trim_whitespace=False)
    type = serializers.ChoiceField(choices=SELF_REGISTRATION_TYPES)
    tel = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    address = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")

    def validate_username(self, value):
        if User.objects.filter(username__iexact=value).exists():
            raise serializers.ValidationError(_("Username already taken."))
        return value

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError(_("Email already in use."))
        return value.lower()

    def validate(self, attrs):
        if attrs["password"] != attrs.pop("repeated_password"):
            raise serializers.ValidationError({"repeated_password": _("Passwords do not match.")})
        candidate = User(username=attrs["username"], email=attrs["email"])
        try:
            validate_password(attrs["password"], user=candidate)
        except DjangoValidationError as exc:
            raise serializers.ValidationError({"password": list(exc.messages)})
        return attrs

    @transaction.atomic
    def create(self, validated_data):
        profile_data = {key: validated_data.pop(key) for key in PROFILE_FIELDS if key in validated_data}
        password = validated_data.pop("password")
        user = User(**validated_data)
        user.set_password(password)
        user.save()
        Profile.objects.create(user=user, **profile_data)
        return user


class LoginSerializer(serializers.Serializer):
    """Resolve ``username``/``password`` to an active user."""

    username = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        user = authenticate(
            request=self.context.get("request"),
            username=attrs["username"],
            password=attrs["password"],
        )
        if user is None:
            raise serializers.ValidationError({"detail": "Invalid Credentials"})
        attrs["user"] = user
        return attrs

"""Auth API views.

Registration and login both answer with a bearer token plus the caller's
role; every other endpoint expects ``Authorization: Bearer <token>``.
"""

import logging

from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from common.api.responses import ok
from profiles.roles import user_type
from .serializers import LoginSerializer, RegistrationSerializer

logger = logging.getLogger(__name__)


def _token_payload(user, token):
    return {
        "token": token.key,
        "username": user.username,
        "email": user.email,
        "user_id": user.id,
        "type": user_type(user),
    }


class RegistrationView(APIView):
    """POST /api/registration/ -> create user and profile, return bearer token."""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = RegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        token, _ = Token.objects.get_or_create(user=user)
        logger.info("Registered user %s as %s", user.id, user_type(user))
        return ok(_token_payload(user, token), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """POST /api/login/ -> validate credentials and return bearer token."""

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        token, _ = Token.objects.get_or_create(user=user)
        return ok(_token_payload(user, token))

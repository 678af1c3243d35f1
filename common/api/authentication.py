"""Bearer token authentication.

Clients send ``Authorization: Bearer <token>``; tokens are the DRF authtoken
keys handed out by registration and login.
"""

from rest_framework.authentication import TokenAuthentication


class BearerTokenAuthentication(TokenAuthentication):
    """TokenAuthentication that expects the ``Bearer`` keyword."""

    keyword = "Bearer"

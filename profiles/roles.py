"""Role helpers used by permissions and services.

Admin privilege is a capability check: staff users and users whose profile
type is 'admin' may bypass workflow validation.
"""

from .models import Profile


def user_type(user) -> str:
    """Return the profile type of ``user`` or an empty string."""
    if not user or not user.is_authenticated:
        return ""
    try:
        return user.profile.type
    except Profile.DoesNotExist:
        return ""


def is_admin(user) -> bool:
    if not user or not user.is_authenticated:
        return False
    return bool(user.is_staff) or user_type(user) == Profile.Type.ADMIN

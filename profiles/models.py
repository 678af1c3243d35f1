"""Profiles app models.

Defines the Profile model that attaches a role (customer, tailor, admin,
applicant) and contact details to the base user. String fields default to
empty strings to avoid nulls in API responses.
"""

from django.db import models
from django.conf import settings


class Profile(models.Model):
    """
    Role profile for a single user.

    A profile is created at most once per user (OneToOne relationship). The
    ``type`` drives authorization: admins may override workflow rules, tailors
    own a Tailor record, customers place orders.
    """

    class Type(models.TextChoices):
        CUSTOMER = "customer", "customer"
        TAILOR = "tailor", "tailor"
        ADMIN = "admin", "admin"
        APPLICANT = "applicant", "applicant"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    type = models.CharField(
        max_length=20,
        choices=Type.choices,
        default=Type.CUSTOMER,
    )
    tel = models.CharField(max_length=50, blank=True, default="")
    address = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        """Readable representation for admin and debugging."""
        return f"Profile<{self.user_id}:{self.type}>"

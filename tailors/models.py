"""Tailors app models.

A Tailor is the work profile of exactly one user. Tailors are never deleted
in normal flows, only deactivated; inactive tailors cannot receive new
assignments.
"""

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Tailor(models.Model):
    """Work profile of a user who produces custom orders."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="tailor",
    )
    name = models.CharField(max_length=150)
    phone = models.CharField(max_length=50, blank=True, default="")
    skills = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    rating = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(5)],
    )
    payout_email = models.EmailField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Tailor<{self.id} {self.name}{'' if self.is_active else ' inactive'}>"

from django.contrib import admin
from .models import Tailor


@admin.register(Tailor)
class TailorAdmin(admin.ModelAdmin):
    """
    Tailor list: name, owning user, active flag and rating.
    Tailors are deactivated, not deleted.
    """
    list_display = ("id", "name", "user", "is_active", "rating", "payout_email", "created_at")
    list_select_related = ("user",)
    list_filter = ("is_active", "created_at")
    search_fields = ("name", "user__username", "user__email", "payout_email")
    ordering = ("-created_at", "-id")
    autocomplete_fields = ("user",)
    readonly_fields = ("created_at", "updated_at")

    def has_delete_permission(self, request, obj=None):
        return False

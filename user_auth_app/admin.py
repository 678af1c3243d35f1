from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

User = get_user_model()

# Replace the stock registration (idempotent).
try:
    admin.site.unregister(User)
except admin.sites.NotRegistered:
    pass


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    """
    User list with id, role (Profile.type), tailor profile and admin flags.
    """
    list_display = (
        "id",
        "username",
        "email",
        "profile_type_display",
        "has_tailor_profile",
        "is_staff",
        "is_active",
        "date_joined",
        "last_login",
    )
    list_select_related = ("profile", "tailor")
    ordering = ("-date_joined", "-id")
    search_fields = ("username", "email", "profile__type", "tailor__name")
    list_filter = ("is_staff", "is_active", "profile__type")

    def profile_type_display(self, obj):
        prof = getattr(obj, "profile", None)
        return getattr(prof, "type", "") or ""
    profile_type_display.short_description = "role"
    profile_type_display.admin_order_field = "profile__type"

    def has_tailor_profile(self, obj):
        return hasattr(obj, "tailor")
    has_tailor_profile.boolean = True
    has_tailor_profile.short_description = "tailor"

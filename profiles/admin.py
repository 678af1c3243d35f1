from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """
    Role profiles. Setting ``type`` to 'admin' grants the admin capability
    without making the user staff.
    """
    list_display = ("id", "user", "type", "tel", "address", "created_at")
    list_select_related = ("user",)
    list_editable = ("type",)
    list_filter = ("type",)
    search_fields = ("user__username", "user__email", "tel")
    ordering = ("-created_at", "-id")
    raw_id_fields = ("user",)
    readonly_fields = ("created_at",)

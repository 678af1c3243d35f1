from django.contrib import admin
from .models import OrderAssignment


@admin.register(OrderAssignment)
class OrderAssignmentAdmin(admin.ModelAdmin):
    """
    Assignment list: order (source + id), tailor, status, assigned at.
    Status changes made here bypass the mirror onto CustomOrder; use the
    sync endpoint afterwards.
    """
    list_display = ("id", "order_source", "order_id", "tailor", "status", "assigned_at", "updated_at")
    list_select_related = ("tailor",)
    list_filter = ("order_source", "status", "assigned_at")
    search_fields = ("order_id", "tailor__name", "tailor__user__username")
    ordering = ("-created_at", "-id")
    readonly_fields = ("created_at", "updated_at")

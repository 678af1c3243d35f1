from django.contrib import admin
from django.utils.html import format_html
from .models import ClothCustomizer, CustomOrder


@admin.register(CustomOrder)
class CustomOrderAdmin(admin.ModelAdmin):
    """
    Custom order overview:
    - list: id, status (badge), customer, assigned tailor, price, created
    - filter: status, created (date hierarchy)
    - search: customer username/email, tailor name
    - assigned tailor / assigned at are written by the assignment engine only
    """
    list_display = (
        "id",
        "status_badge",
        "customer_username",
        "assigned_tailor",
        "price",
        "assigned_at",
        "created_at",
    )
    list_select_related = ("customer", "assigned_tailor")
    list_filter = ("status", "created_at")
    date_hierarchy = "created_at"
    ordering = ("-created_at", "-id")
    search_fields = ("customer__username", "customer__email", "assigned_tailor__name")
    readonly_fields = ("assigned_tailor", "assigned_at", "created_at", "updated_at")

    def status_badge(self, obj):
        color = {
            "pending": "#9ca3af",
            "assigned": "#6366f1",
            "accepted": "#0ea5e9",
            "in_progress": "#f59e0b",
            "completed": "#22c55e",
            "delivered": "#15803d",
            "cancelled": "#ef4444",
        }.get(obj.status, "#9ca3af")
        return format_html(
            '<span style="display:inline-block;padding:2px 8px;border-radius:999px;'
            'font-size:12px;font-weight:600;color:#fff;background:{};">{}</span>',
            color,
            obj.status,
        )
    status_badge.short_description = "status"
    status_badge.admin_order_field = "status"

    def customer_username(self, obj):
        return obj.customer.username if obj.customer_id else ""
    customer_username.short_description = "customer"


@admin.register(ClothCustomizer)
class ClothCustomizerAdmin(admin.ModelAdmin):
    list_display = ("id", "nickname", "user", "clothing_type", "color", "size", "quantity", "total_price", "created_at")
    list_select_related = ("user",)
    list_filter = ("clothing_type", "size", "created_at")
    search_fields = ("nickname", "user__username", "user__email")
    ordering = ("-created_at", "-id")
    readonly_fields = ("created_at",)

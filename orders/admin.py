from common.choices import DeliveryState
from django.contrib import admin
from django.utils import timezone

from .models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Read-mostly order admin: staff can only mark delivery."""

    list_display = ("id", "number", "user", "email", "total_price", "is_paid", "delivery_state", "created_at")
    list_filter = ("delivery_state", "is_build_order", "created_at")
    search_fields = ("number", "email", "user__email")
    date_hierarchy = "created_at"
    fields = (
        "number",
        "user",
        "email",
        "checkout",
        "order_items",
        "address",
        "city",
        "postal_code",
        "country",
        "payment_method",
        "items_price",
        "shipping_price",
        "tax_price",
        "total_price",
        "is_paid",
        "paid_at",
        "payment_state",
        "payment_details",
        "source_build",
        "is_build_order",
        "delivery_state",
        "delivered_at",
    )
    readonly_fields = tuple(name for name in fields if name != "delivery_state")
    actions = ["mark_delivered"]

    def has_add_permission(self, request):
        return False

    def save_model(self, request, obj, form, change):
        if obj.is_delivered and obj.delivered_at is None:
            obj.delivered_at = timezone.now()
        super().save_model(request, obj, form, change)

    @admin.action(description="Mark selected orders as delivered")
    def mark_delivered(self, request, queryset):
        updated = 0
        for order in queryset.filter(delivered_at__isnull=True):
            order.delivery_state = DeliveryState.DELIVERED
            order.delivered_at = timezone.now()
            order.save(update_fields=["delivery_state", "delivered_at", "updated_at"])
            updated += 1
        self.message_user(request, f"Marked {updated} order(s) as delivered.")

from django.contrib import admin

from .models import CheckoutSession


@admin.register(CheckoutSession)
class CheckoutSessionAdmin(admin.ModelAdmin):
    """Read-only view of checkout sessions for support staff."""

    list_display = ("id", "user", "total_price", "payment_state", "finalization_state", "is_build_checkout", "created_at")
    list_filter = ("payment_state", "finalization_state", "is_build_checkout")
    search_fields = ("user__email", "user__username")
    date_hierarchy = "created_at"
    list_select_related = ("user",)

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

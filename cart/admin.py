"""Admin registration for cart models.

Provides admin interfaces for `Cart` and `CartItem`, with inline items on
the cart page for easier moderation and support. Lines are read-only here;
staff change carts only through the clear and merge actions, which go
through the cart services and keep `total_price` in step.
"""

from common.exceptions import CommerceError
from django import forms
from django.contrib import admin, messages
from django.contrib.admin.helpers import ActionForm
from django.contrib.auth import get_user_model

from .models import Cart, CartItem
from .services import clear_cart, merge_guest_into_user


class CartMergeActionForm(ActionForm):
    """Extra inputs for admin actions.

    Provides a `user` field so support can merge a guest cart into a user.
    """

    user = forms.ModelChoiceField(
        queryset=get_user_model().objects.all(),
        required=False,
        label="Target user for merge (guest carts only)",
        help_text="Select when using 'Merge guest cart into user'.",
    )


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    fields = ("product", "build", "name", "size", "color", "quantity", "unit_price", "updated_at")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


class OwnerTypeFilter(admin.SimpleListFilter):
    title = "owner type"
    parameter_name = "owner_type"

    def lookups(self, request, model_admin):
        return (
            ("user", "User carts"),
            ("guest", "Guest carts"),
        )

    def queryset(self, request, queryset):
        value = self.value()
        if value == "user":
            return queryset.filter(user__isnull=False)
        if value == "guest":
            return queryset.filter(user__isnull=True)
        return queryset


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "session_id", "total_price", "updated_at", "created_at")
    list_filter = (OwnerTypeFilter,)
    search_fields = ("session_id", "user__username", "user__email")
    ordering = ("-updated_at",)
    readonly_fields = ("user", "session_id", "total_price", "created_at", "updated_at")
    inlines = [CartItemInline]
    list_select_related = ("user",)

    def has_add_permission(self, request):
        return False

    action_form = CartMergeActionForm

    @admin.action(description="Clear cart (remove all lines)")
    def action_clear_cart(self, request, queryset):
        successes = 0
        failures = 0
        for cart in queryset:
            try:
                clear_cart(owner=cart.owner)
                successes += 1
            except CommerceError:
                failures += 1
        if successes:
            messages.success(request, f"Cleared {successes} cart(s).")
        if failures:
            messages.error(request, f"Failed to clear {failures} cart(s).")

    @admin.action(description="Merge guest cart into selected user")
    def action_merge_guest_cart_to_user(self, request, queryset):
        User = get_user_model()
        user_id = request.POST.get("user")
        if not user_id:
            messages.error(request, "Please select a target user in the action form.")
            return
        try:
            target_user = User.objects.get(pk=user_id)
        except User.DoesNotExist:
            messages.error(request, "Selected user not found.")
            return

        successes = 0
        skipped = 0
        failures = 0
        for cart in queryset:
            if cart.user_id:
                skipped += 1
                continue
            try:
                merge_guest_into_user(session_id=cart.session_id, user_id=target_user.id)
                successes += 1
            except CommerceError:
                failures += 1
        if successes:
            messages.success(
                request, f"Merged {successes} guest cart(s) into {target_user.email or target_user.username}."
            )
        if skipped:
            messages.info(request, f"Skipped {skipped} user-bound cart(s); merge applies to guest carts only.")
        if failures:
            messages.error(request, f"Failed to merge {failures} cart(s).")

    actions = [
        "action_clear_cart",
        "action_merge_guest_cart_to_user",
    ]


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ("id", "cart", "name", "product", "build", "quantity", "unit_price", "updated_at")
    list_filter = ("is_build",)
    search_fields = ("name", "cart__user__email", "cart__session_id")
    ordering = ("id",)
    list_select_related = ("cart", "product", "build")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

"""Cart URL routes (v1)."""

from django.urls import path

from .views import CartBuildItemView, CartDetailView, CartItemsView, MergeGuestCartView

app_name = "cart"

urlpatterns = [
    path("", CartDetailView.as_view(), name="cart-detail"),
    path("items/", CartItemsView.as_view(), name="cart-items"),
    path("builds/", CartBuildItemView.as_view(), name="cart-add-build"),
    path("merge/", MergeGuestCartView.as_view(), name="cart-merge-guest"),
]

"""Checkout URL routes (v1)."""

from django.urls import path

from .views import (
    BuildCheckoutPreviewView,
    CheckoutCreateView,
    CheckoutDetailView,
    CheckoutFinalizeView,
    CheckoutPayView,
)

app_name = "checkout"

urlpatterns = [
    path("", CheckoutCreateView.as_view(), name="checkout-create"),
    path("builds/<int:build_id>/preview/", BuildCheckoutPreviewView.as_view(), name="checkout-build-preview"),
    path("<int:checkout_id>/", CheckoutDetailView.as_view(), name="checkout-detail"),
    path("<int:checkout_id>/pay/", CheckoutPayView.as_view(), name="checkout-pay"),
    path("<int:checkout_id>/finalize/", CheckoutFinalizeView.as_view(), name="checkout-finalize"),
]

"""Django app configuration for the Checkout app."""

from django.apps import AppConfig


class CheckoutConfig(AppConfig):
    """AppConfig for checkout sessions (snapshot, payment, finalization)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "checkout"

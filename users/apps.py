"""Django app configuration for the users app."""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    """Accounts referenced by carts, checkouts and orders."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "users"

"""Django app configuration for PC builds."""

from django.apps import AppConfig


class BuildsConfig(AppConfig):
    """User-assembled component sets that can be priced and purchased."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "builds"

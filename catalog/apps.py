"""Django app configuration for catalog."""

from django.apps import AppConfig


class CatalogConfig(AppConfig):
    """Products and their images, read by the cart and checkout."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "catalog"

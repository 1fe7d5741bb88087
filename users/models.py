"""User model for the storefront.

Extends Django's `AbstractUser` with a unique email and a role. Account
management itself lives outside this project; carts, checkouts and orders
only reference users by id. The API only issues JWTs for existing accounts.
"""

from common.choices import UserRole
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Customer or staff account."""

    ROLE_CUSTOMER = UserRole.CUSTOMER
    ROLE_ADMIN = UserRole.ADMIN

    email = models.EmailField(unique=True)
    role = models.CharField(max_length=16, choices=UserRole.choices, default=ROLE_CUSTOMER)

    def __str__(self) -> str:  # pragma: no cover
        return self.email or self.username

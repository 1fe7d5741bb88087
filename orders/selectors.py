"""Read-only order lookups for the owner-facing API."""

from common.exceptions import OrderNotFound
from django.db.models import QuerySet

from .models import Order


def list_orders_for_user(*, user_id: int) -> QuerySet:
    """Orders placed by `user_id`, newest first."""

    return Order.objects.filter(user_id=user_id).order_by("-created_at", "-id")


def get_order_for_user(*, order_id, user_id: int) -> Order:
    """Return the user's order, or raise `OrderNotFound`.

    Someone else's order is reported as not found rather than forbidden.
    """

    try:
        return Order.objects.get(id=int(order_id), user_id=user_id)
    except (Order.DoesNotExist, TypeError, ValueError):
        raise OrderNotFound(order_id=str(order_id))

"""Domain errors for the cart, checkout and order services.

Services raise these before writing anything. The DRF exception handler at
the bottom of this module renders them as
``{"error": <code>, "detail": <message>, ...details}`` so clients can tell
bad input, missing resources and state conflicts apart from server failures.
"""

import logging
from decimal import Decimal
from typing import Any, Optional

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger("rigforge.errors")


def json_safe(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {k: json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(v) for v in value]
    return value


class CommerceError(Exception):
    """Base class for business-rule violations."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "commerce_error"
    default_message = "Request could not be processed."

    def __init__(self, message: Optional[str] = None, **details: Any):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def as_dict(self) -> dict:
        return {"error": self.error_code, "detail": self.message, **json_safe(self.details)}


class InvalidAmount(CommerceError):
    error_code = "invalid_amount"

    def __init__(self, field: str, value: Any, reason: str = "is not a valid amount"):
        super().__init__(f"{field} {reason}", field=field, value=None if value is None else str(value))


class ValidationFailed(CommerceError):
    error_code = "validation_failed"
    default_message = "Request is missing required fields."


# Not found


class NotFound(CommerceError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "not_found"
    default_message = "Not found."


class ProductNotFound(NotFound):
    error_code = "product_not_found"
    default_message = "Product not found."


class BuildNotFound(NotFound):
    error_code = "build_not_found"
    default_message = "PC build not found."


class CartNotFound(NotFound):
    error_code = "cart_not_found"
    default_message = "Cart not found."


class LineNotFound(NotFound):
    error_code = "line_not_found"
    default_message = "Item not found in cart."


class CheckoutNotFound(NotFound):
    error_code = "checkout_not_found"
    default_message = "Checkout not found."


class OrderNotFound(NotFound):
    error_code = "order_not_found"
    default_message = "Order not found."


# Authorization


class NotAuthorized(CommerceError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "not_authorized"
    default_message = "Not authorized."


class BuildNotAuthorized(NotAuthorized):
    error_code = "build_not_authorized"
    default_message = "Not authorized to use this build."


class CheckoutNotAuthorized(NotAuthorized):
    error_code = "checkout_not_authorized"
    default_message = "Not authorized to access this checkout."


# Money disagreements


class TotalMismatch(CommerceError):
    error_code = "total_mismatch"
    default_message = "Declared total does not match the sum of the items."


class PaymentAmountMismatch(CommerceError):
    error_code = "payment_amount_mismatch"
    default_message = "Payment amount does not match checkout total."


# Checkout state machine


class InvalidPaymentStatus(CommerceError):
    error_code = "invalid_payment_status"
    default_message = "Invalid payment status."


class PaymentRequired(CommerceError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "payment_required"
    default_message = "Checkout is not paid."


class AlreadyFinalized(CommerceError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "already_finalized"
    default_message = "Checkout already finalized."


class ComponentsOutOfStock(CommerceError):
    status_code = status.HTTP_409_CONFLICT
    error_code = "components_out_of_stock"
    default_message = "Some components are out of stock."


class FrozenFieldError(Exception):
    """Raised when code tries to rewrite a field that is fixed after creation."""


def api_exception_handler(exc, context):
    """DRF exception handler aware of `CommerceError` and database failures."""

    if isinstance(exc, CommerceError):
        return Response(exc.as_dict(), status=exc.status_code)
    response = exception_handler(exc, context)
    if response is not None:
        return response
    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.error(
            "api.server_error",
            exc_info=exc,
            extra={"event": "api.server_error", "view": type(view).__name__ if view else None},
        )
        return Response(
            {"error": "server_error", "detail": "The server failed to process the request. Try again later."},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return None

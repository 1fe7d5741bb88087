"""DRF views for checkout sessions.

All endpoints require authentication and act only on the caller's own
sessions.
"""

from common.exceptions import json_safe
from drf_spectacular.utils import OpenApiExample, extend_schema, inline_serializer
from orders.serializers import OrderSerializer
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import CheckoutReadSerializer, CreateCheckoutSerializer, PaymentSerializer
from .services import finalize, get_checkout_for_owner, preview_build_checkout

ERROR_RESPONSE = inline_serializer(
    name="CheckoutError",
    fields={"error": rf_serializers.CharField(), "detail": rf_serializers.CharField()},
)


class CheckoutCreateView(APIView):
    """Open a checkout session from cart lines or from a PC build."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "checkout_write"

    @extend_schema(
        tags=["Checkout"],
        summary="Create checkout session",
        description=(
            "With `checkout_items` and `total_price`, the declared total must match the lines within 0.01. "
            "With `build_id`, lines and total are computed from the build and any total sent is ignored."
        ),
        request=CreateCheckoutSerializer,
        responses={201: CheckoutReadSerializer, 400: ERROR_RESPONSE, 403: ERROR_RESPONSE, 404: ERROR_RESPONSE},
        examples=[
            OpenApiExample(
                "From cart",
                value={
                    "checkout_items": [
                        {"product_id": 100, "name": "Ryzen 7 7800X3D", "image": "", "unit_price": "45000.00",
                         "quantity": 1}
                    ],
                    "shipping_address": {"address": "12 Main St", "city": "Manila", "postal_code": "1000",
                                         "country": "PH"},
                    "payment_method": "PayPal",
                    "total_price": "45000.00",
                },
                request_only=True,
            ),
            OpenApiExample(
                "From build",
                value={
                    "build_id": 7,
                    "shipping_address": {"address": "12 Main St", "city": "Manila", "postal_code": "1000",
                                         "country": "PH"},
                    "payment_method": "PayPal",
                },
                request_only=True,
            ),
            OpenApiExample(
                "Total mismatch",
                value={
                    "error": "total_mismatch",
                    "detail": "Declared total does not match the sum of the items.",
                    "declared": "44000.00",
                    "expected": "45000.00",
                    "difference": "-1000.00",
                },
                response_only=True,
                status_codes=["400"],
            ),
        ],
    )
    def post(self, request):
        serializer = CreateCheckoutSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        checkout = serializer.save()
        return Response(CheckoutReadSerializer(checkout).data, status=status.HTTP_201_CREATED)


class BuildCheckoutPreviewView(APIView):
    """Price a PC build for checkout without creating a session."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "checkout"

    @extend_schema(
        tags=["Checkout"],
        summary="Preview build checkout",
        description="Returns the lines and total a checkout for this build would have, plus compatibility issues. "
        "Fails with 409 when a component is out of stock.",
        responses={
            200: inline_serializer(
                name="BuildCheckoutPreview",
                fields={
                    "build": rf_serializers.DictField(),
                    "checkout_items": rf_serializers.ListField(child=rf_serializers.DictField()),
                    "total_price": rf_serializers.DecimalField(max_digits=12, decimal_places=2),
                    "image": rf_serializers.CharField(),
                    "unresolved_components": rf_serializers.ListField(child=rf_serializers.IntegerField()),
                    "compatibility": rf_serializers.DictField(),
                },
            ),
            403: ERROR_RESPONSE,
            404: ERROR_RESPONSE,
            409: ERROR_RESPONSE,
        },
    )
    def get(self, request, build_id: int):
        preview = preview_build_checkout(user_id=request.user.id, build_id=build_id)
        return Response(json_safe(preview), status=status.HTTP_200_OK)


class CheckoutDetailView(APIView):
    """Read one of the caller's checkout sessions."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "checkout"

    @extend_schema(
        tags=["Checkout"],
        summary="Get checkout session",
        responses={200: CheckoutReadSerializer, 403: ERROR_RESPONSE, 404: ERROR_RESPONSE},
    )
    def get(self, request, checkout_id: int):
        checkout = get_checkout_for_owner(checkout_id=checkout_id, user_id=request.user.id)
        return Response(CheckoutReadSerializer(checkout).data, status=status.HTTP_200_OK)


class CheckoutPayView(APIView):
    """Record a successful payment for a checkout session."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "checkout_write"

    @extend_schema(
        tags=["Checkout"],
        summary="Mark checkout paid",
        description="Only `payment_status: paid` is accepted. When `payment_details.amount` is given it must match "
        "the session total within 0.01. Repeating the call keeps the first paid_at.",
        request=PaymentSerializer,
        responses={200: CheckoutReadSerializer, 400: ERROR_RESPONSE, 403: ERROR_RESPONSE, 404: ERROR_RESPONSE},
        examples=[
            OpenApiExample(
                "Paid",
                value={"payment_status": "paid", "payment_details": {"transaction_id": "PAY-123", "amount": "45000.00"}},
                request_only=True,
            ),
        ],
    )
    def put(self, request, checkout_id: int):
        serializer = PaymentSerializer(data=request.data, context={"request": request, "checkout_id": checkout_id})
        serializer.is_valid(raise_exception=True)
        checkout = serializer.save()
        return Response(CheckoutReadSerializer(checkout).data, status=status.HTTP_200_OK)


class CheckoutFinalizeView(APIView):
    """Convert a paid checkout session into an order."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "checkout_write"

    @extend_schema(
        tags=["Checkout"],
        summary="Finalize checkout",
        description="Creates the order for a paid session. A session can be finalized once; "
        "the caller's cart is emptied afterwards.",
        request=None,
        responses={201: OrderSerializer, 403: ERROR_RESPONSE, 404: ERROR_RESPONSE, 409: ERROR_RESPONSE},
    )
    def post(self, request, checkout_id: int):
        order = finalize(checkout_id=checkout_id, user_id=request.user.id)
        return Response(OrderSerializer(order, context={"request": request}).data, status=status.HTTP_201_CREATED)

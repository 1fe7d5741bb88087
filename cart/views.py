"""DRF views for cart operations.

Every endpoint works for both authenticated users and guests. Guests are
identified by the `X-Session-Id` header; when a guest adds to a cart without
one, a new id is issued and echoed back in the same header.
"""

from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema, inline_serializer
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .owners import SESSION_HEADER, GuestOwner, owner_from_request
from .selectors import cart_view, get_cart_view
from .serializers import (
    AddBuildSerializer,
    AddItemSerializer,
    CartReadSerializer,
    MergeCartSerializer,
    RemoveItemSerializer,
    UpdateItemQuantitySerializer,
)

SESSION_PARAMETER = OpenApiParameter(
    name=SESSION_HEADER,
    location=OpenApiParameter.HEADER,
    required=False,
    description="Guest session identifier (ignored for authenticated requests)",
    type=str,
)

CART_EXAMPLE = OpenApiExample(
    "Cart",
    value={
        "id": 1,
        "user_id": None,
        "session_id": "guest_1718000000000_a1b2c3",
        "items": [
            {
                "kind": "catalog",
                "product_id": 100,
                "build_id": None,
                "name": "Ryzen 7 7800X3D",
                "image": "https://cdn.example.com/p/100.jpg",
                "unit_price": "45000.00",
                "quantity": 2,
                "size": "",
                "color": "",
                "is_build": False,
                "line_total": "90000.00",
            }
        ],
        "total_price": "90000.00",
    },
)

ERROR_RESPONSE = inline_serializer(
    name="CartError",
    fields={"error": rf_serializers.CharField(), "detail": rf_serializers.CharField()},
)


def _cart_response(cart, owner, *, status_code=status.HTTP_200_OK) -> Response:
    data = CartReadSerializer.from_view(cart_view(cart, owner)).data
    response = Response(data, status=status_code)
    if isinstance(owner, GuestOwner):
        response[SESSION_HEADER] = owner.session_id
    return response


class CartDetailView(APIView):
    """Return the caller's cart, or an empty cart when there is none."""

    permission_classes = [AllowAny]
    throttle_scope = "cart"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Get cart",
        description="Returns the authenticated user's cart, or the guest cart for X-Session-Id. Never 404s.",
        parameters=[SESSION_PARAMETER],
        responses={200: CartReadSerializer},
        examples=[CART_EXAMPLE],
    )
    def get(self, request):
        owner = owner_from_request(request, required=False)
        data = CartReadSerializer.from_view(get_cart_view(owner)).data
        return Response(data, status=status.HTTP_200_OK)


class CartItemsView(APIView):
    """Add, update and remove catalog lines (or build lines by key)."""

    permission_classes = [AllowAny]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Add item to cart",
        description=(
            "Adds a product to the cart, or increases the quantity of the matching line "
            "(same product, size and color). Guests without X-Session-Id get a new one."
        ),
        parameters=[SESSION_PARAMETER],
        request=AddItemSerializer,
        responses={201: CartReadSerializer, 400: ERROR_RESPONSE, 404: ERROR_RESPONSE},
        examples=[
            OpenApiExample("Add", value={"product_id": 100, "quantity": 2, "size": "", "color": ""}, request_only=True),
            CART_EXAMPLE,
        ],
    )
    def post(self, request):
        owner = owner_from_request(request, create=True)
        serializer = AddItemSerializer(data=request.data, context={"request": request, "owner": owner})
        serializer.is_valid(raise_exception=True)
        cart = serializer.save()
        return _cart_response(cart, owner, status_code=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Update cart line quantity",
        description="Sets the quantity of the line identified by product_id/build_id, size and color. "
        "A quantity of zero or less removes the line.",
        parameters=[SESSION_PARAMETER],
        request=UpdateItemQuantitySerializer,
        responses={200: CartReadSerializer, 400: ERROR_RESPONSE, 404: ERROR_RESPONSE},
        examples=[OpenApiExample("Update", value={"product_id": 100, "quantity": 3}, request_only=True)],
    )
    def patch(self, request):
        owner = owner_from_request(request)
        serializer = UpdateItemQuantitySerializer(data=request.data, context={"request": request, "owner": owner})
        serializer.is_valid(raise_exception=True)
        cart = serializer.save()
        return _cart_response(cart, owner)

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Remove cart line",
        description="Removes the line identified by product_id/build_id, size and color. The cart is kept.",
        parameters=[SESSION_PARAMETER],
        request=RemoveItemSerializer,
        responses={200: CartReadSerializer, 400: ERROR_RESPONSE, 404: ERROR_RESPONSE},
        examples=[OpenApiExample("Remove", value={"product_id": 100, "size": "", "color": ""}, request_only=True)],
    )
    def delete(self, request):
        owner = owner_from_request(request)
        serializer = RemoveItemSerializer(data=request.data, context={"request": request, "owner": owner})
        serializer.is_valid(raise_exception=True)
        cart = serializer.save()
        return _cart_response(cart, owner)


class CartBuildItemView(APIView):
    """Add a PC build to the cart as one priced line."""

    permission_classes = [AllowAny]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Add PC build to cart",
        description="Prices the build from its components and adds it as a single line. "
        "Private builds can only be added by their creator.",
        parameters=[SESSION_PARAMETER],
        request=AddBuildSerializer,
        responses={201: CartReadSerializer, 400: ERROR_RESPONSE, 403: ERROR_RESPONSE, 404: ERROR_RESPONSE},
        examples=[OpenApiExample("Add build", value={"build_id": 7, "quantity": 1}, request_only=True)],
    )
    def post(self, request):
        owner = owner_from_request(request, create=True)
        serializer = AddBuildSerializer(data=request.data, context={"request": request, "owner": owner})
        serializer.is_valid(raise_exception=True)
        cart = serializer.save()
        return _cart_response(cart, owner, status_code=status.HTTP_201_CREATED)


class MergeGuestCartView(APIView):
    """Authenticated endpoint to merge a guest cart into the user's cart."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Merge guest cart into user cart",
        description="Provide the guest session id (X-Session-Id header or session_id in body). "
        "Safe to retry: a second merge finds no guest cart and changes nothing.",
        parameters=[SESSION_PARAMETER],
        request=MergeCartSerializer,
        responses={
            200: inline_serializer(
                name="CartMergeResponse",
                fields={"outcome": rf_serializers.CharField(), "cart": CartReadSerializer()},
            ),
            400: ERROR_RESPONSE,
        },
        examples=[OpenApiExample("Merged", value={"outcome": "both_exist", "cart": CART_EXAMPLE.value})],
    )
    def post(self, request):
        payload = {"session_id": request.data.get("session_id") or request.headers.get(SESSION_HEADER)}
        serializer = MergeCartSerializer(data=payload, context={"request": request})
        serializer.is_valid(raise_exception=True)
        result = serializer.save()
        data = {"outcome": result.outcome.value, "cart": CartReadSerializer.from_view(result.cart).data}
        return Response(data, status=status.HTTP_200_OK)

"""Orders API endpoints.

Owners can list and read their own orders. Orders are created only by
finalizing a checkout session and are never changed through the API.
"""

from common.choices import DeliveryState
from django_filters import rest_framework as filters
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, extend_schema
from rest_framework import generics
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Order
from .selectors import get_order_for_user, list_orders_for_user
from .serializers import OrderSerializer

ORDER_EXAMPLE = OpenApiExample(
    "Order",
    value={
        "id": 12,
        "number": "ORD-000012",
        "email": "buyer@example.com",
        "checkout_id": 30,
        "order_items": [
            {
                "product_id": 100,
                "build_id": None,
                "name": "Ryzen 7 7800X3D",
                "image": "https://cdn.example.com/p/100.jpg",
                "unit_price": "45000.00",
                "quantity": 1,
                "size": "",
                "color": "",
                "is_build": False,
                "line_total": "45000.00",
            }
        ],
        "shipping_address": {"address": "12 Main St", "city": "Manila", "postal_code": "1000", "country": "PH"},
        "payment_method": "PayPal",
        "items_price": "45000.00",
        "shipping_price": "0.00",
        "tax_price": "0.00",
        "total_price": "45000.00",
        "is_paid": True,
        "paid_at": "2025-01-01T12:00:00Z",
        "payment_state": "paid",
        "payment_details": {"transaction_id": "PAY-123", "amount": "45000.00"},
        "delivery_state": "pending",
        "is_delivered": False,
        "delivered_at": None,
        "source_build_id": None,
        "is_build_order": False,
        "created_at": "2025-01-01T12:00:05Z",
    },
)


class DefaultPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "page_size"


class OrderFilterSet(filters.FilterSet):
    delivery_state = filters.ChoiceFilter(choices=DeliveryState.choices)

    class Meta:
        model = Order
        fields = ["delivery_state", "number"]


class OrderListView(generics.ListAPIView):
    """List the authenticated user's orders, newest first."""

    permission_classes = [IsAuthenticated]
    serializer_class = OrderSerializer
    pagination_class = DefaultPagination
    filter_backends = [filters.DjangoFilterBackend]
    filterset_class = OrderFilterSet
    throttle_scope = "orders"

    def get_queryset(self):
        return list_orders_for_user(user_id=self.request.user.id)

    @extend_schema(
        tags=["Orders"],
        summary="List my orders",
        description="List current user's orders with optional filters and pagination.",
        parameters=[
            OpenApiParameter(name="delivery_state", description="pending or delivered", required=False, type=str),
            OpenApiParameter(name="number", description="Order number exact match", required=False, type=str),
            OpenApiParameter(name="page", description="Page number", required=False, type=int),
            OpenApiParameter(name="page_size", description="Items per page", required=False, type=int),
        ],
    )
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class OrderDetailView(APIView):
    """Retrieve a single order for the authenticated user."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "orders"

    @extend_schema(
        tags=["Orders"],
        summary="Get order detail",
        description="Returns one of the caller's orders. Other users' orders are reported as not found.",
        responses={200: OrderSerializer},
        examples=[ORDER_EXAMPLE],
    )
    def get(self, request, order_id: int):
        order = get_order_for_user(order_id=order_id, user_id=request.user.id)
        return Response(OrderSerializer(order, context={"request": request}).data)

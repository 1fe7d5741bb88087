"""DRF serializers for Orders.

Orders are read-only through the API; everything shown is the snapshot
taken at finalization.
"""

from common.money import line_total
from rest_framework import serializers

from .models import Order


class OrderLineSerializer(serializers.Serializer):
    """One snapshotted order line with its computed line total."""

    product_id = serializers.IntegerField(allow_null=True, required=False)
    build_id = serializers.IntegerField(allow_null=True, required=False)
    name = serializers.CharField()
    image = serializers.CharField(allow_blank=True, required=False)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField()
    size = serializers.CharField(allow_blank=True, required=False)
    color = serializers.CharField(allow_blank=True, required=False)
    is_build = serializers.BooleanField(required=False)
    line_total = serializers.SerializerMethodField()

    def get_line_total(self, obj) -> str:
        return str(line_total(obj["unit_price"], obj["quantity"]))


class ShippingAddressSerializer(serializers.Serializer):
    address = serializers.CharField()
    city = serializers.CharField()
    postal_code = serializers.CharField()
    country = serializers.CharField()


class OrderSerializer(serializers.ModelSerializer):
    """API representation for an order."""

    order_items = OrderLineSerializer(many=True, read_only=True)
    shipping_address = ShippingAddressSerializer(read_only=True)
    checkout_id = serializers.IntegerField(read_only=True, allow_null=True)
    source_build_id = serializers.IntegerField(read_only=True, allow_null=True)
    is_delivered = serializers.BooleanField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "number",
            "email",
            "checkout_id",
            "order_items",
            "shipping_address",
            "payment_method",
            "items_price",
            "shipping_price",
            "tax_price",
            "total_price",
            "is_paid",
            "paid_at",
            "payment_state",
            "payment_details",
            "delivery_state",
            "is_delivered",
            "delivered_at",
            "source_build_id",
            "is_build_order",
            "created_at",
        ]
        read_only_fields = fields

"""Checkout serializers.

Input serializers only check the request's shape. Business rules (required
fields, amounts, totals) are enforced by the checkout services, which
report them with the domain error codes.
"""

from rest_framework import serializers

from .models import CheckoutSession
from .services import create_from_build, create_from_cart, record_payment


class CheckoutLineSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(allow_null=True, required=False)
    build_id = serializers.IntegerField(allow_null=True, required=False)
    name = serializers.CharField()
    image = serializers.CharField(allow_blank=True, required=False)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField()
    size = serializers.CharField(allow_blank=True, required=False)
    color = serializers.CharField(allow_blank=True, required=False)
    is_build = serializers.BooleanField(required=False)


class ShippingAddressSerializer(serializers.Serializer):
    address = serializers.CharField()
    city = serializers.CharField()
    postal_code = serializers.CharField()
    country = serializers.CharField()


class CheckoutReadSerializer(serializers.ModelSerializer):
    """API representation of a checkout session."""

    checkout_items = CheckoutLineSerializer(many=True, source="line_items", read_only=True)
    shipping_address = ShippingAddressSerializer(read_only=True)
    source_build_id = serializers.IntegerField(read_only=True, allow_null=True)
    is_paid = serializers.BooleanField(read_only=True)
    is_finalized = serializers.BooleanField(read_only=True)

    class Meta:
        model = CheckoutSession
        fields = [
            "id",
            "checkout_items",
            "shipping_address",
            "payment_method",
            "total_price",
            "payment_state",
            "is_paid",
            "paid_at",
            "payment_details",
            "finalization_state",
            "is_finalized",
            "finalized_at",
            "source_build_id",
            "is_build_checkout",
            "created_at",
        ]


class CreateCheckoutSerializer(serializers.Serializer):
    """Write serializer for opening a checkout from cart lines or from a build."""

    checkout_items = serializers.ListField(child=serializers.JSONField(), required=False, allow_empty=True)
    shipping_address = serializers.DictField(required=False)
    payment_method = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    total_price = serializers.JSONField(required=False)
    build_id = serializers.IntegerField(required=False, allow_null=True)

    def create(self, validated_data):  # type: ignore[override]
        user = self.context["request"].user
        build_id = validated_data.get("build_id")
        if build_id is not None:
            return create_from_build(
                user_id=user.id,
                build_id=build_id,
                shipping_address=validated_data.get("shipping_address"),
                payment_method=validated_data.get("payment_method"),
            )
        return create_from_cart(
            user_id=user.id,
            lines=validated_data.get("checkout_items"),
            shipping_address=validated_data.get("shipping_address"),
            payment_method=validated_data.get("payment_method"),
            declared_total=validated_data.get("total_price"),
        )


class PaymentSerializer(serializers.Serializer):
    """Write serializer for recording a payment result."""

    payment_status = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    payment_details = serializers.JSONField(required=False, allow_null=True)

    def save(self, **kwargs):
        user = self.context["request"].user
        return record_payment(
            checkout_id=self.context["checkout_id"],
            user_id=user.id,
            status=self.validated_data.get("payment_status"),
            payment_details=self.validated_data.get("payment_details"),
        )

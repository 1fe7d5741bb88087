"""Cart serializers for read and write operations.

Quantities are taken as raw values and normalized by the cart services, so
that malformed input is reported as `invalid_amount` like everywhere else.
"""

from rest_framework import serializers

from .lines import LineKey
from .selectors import CartView
from .services import add_build_line, add_line, merge_guest_into_user, remove_line, update_line_quantity


class CartLineReadSerializer(serializers.Serializer):
    """Read serializer for a cart line."""

    kind = serializers.CharField()
    product_id = serializers.IntegerField(allow_null=True)
    build_id = serializers.IntegerField(allow_null=True)
    name = serializers.CharField()
    image = serializers.CharField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField()
    size = serializers.CharField(allow_blank=True)
    color = serializers.CharField(allow_blank=True)
    is_build = serializers.BooleanField()
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2)


class CartReadSerializer(serializers.Serializer):
    """Read serializer for the cart summary and lines."""

    id = serializers.IntegerField(allow_null=True)
    user_id = serializers.IntegerField(allow_null=True)
    session_id = serializers.CharField(allow_null=True)
    items = CartLineReadSerializer(many=True, source="lines")
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)

    @classmethod
    def from_view(cls, view: CartView):
        return cls(view)


class LineKeySerializer(serializers.Serializer):
    """Identifies a cart line by product or build plus size and color."""

    product_id = serializers.IntegerField(required=False, allow_null=True)
    build_id = serializers.IntegerField(required=False, allow_null=True)
    size = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=32, default="")
    color = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=32, default="")

    def validate(self, attrs):
        product_id = attrs.get("product_id")
        build_id = attrs.get("build_id")
        if (product_id is None) == (build_id is None):
            raise serializers.ValidationError("Provide exactly one of product_id or build_id.")
        if build_id is not None:
            attrs["key"] = LineKey.build(build_id, attrs.get("size"), attrs.get("color"))
        else:
            attrs["key"] = LineKey.catalog(product_id, attrs.get("size"), attrs.get("color"))
        return attrs


class AddItemSerializer(serializers.Serializer):
    """Write serializer for adding a catalog product to the cart."""

    product_id = serializers.IntegerField()
    quantity = serializers.JSONField(required=False, default=1)
    size = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=32, default="")
    color = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=32, default="")

    def create(self, validated_data):  # type: ignore[override]
        owner = self.context["owner"]
        return add_line(owner=owner, **validated_data)


class UpdateItemQuantitySerializer(LineKeySerializer):
    """Write serializer for setting a line's quantity (zero or less removes it)."""

    quantity = serializers.JSONField()

    def save(self, **kwargs):
        owner = self.context["owner"]
        return update_line_quantity(
            owner=owner, key=self.validated_data["key"], quantity=self.validated_data["quantity"]
        )


class RemoveItemSerializer(LineKeySerializer):
    """Write serializer for removing a line."""

    def save(self, **kwargs):
        owner = self.context["owner"]
        return remove_line(owner=owner, key=self.validated_data["key"])


class AddBuildSerializer(serializers.Serializer):
    """Write serializer for adding a PC build to the cart."""

    build_id = serializers.IntegerField()
    quantity = serializers.JSONField(required=False, default=1)

    def create(self, validated_data):  # type: ignore[override]
        owner = self.context["owner"]
        return add_build_line(owner=owner, **validated_data)


class MergeCartSerializer(serializers.Serializer):
    """Write serializer for merging a guest cart into the caller's cart."""

    session_id = serializers.CharField(max_length=64)

    def save(self, **kwargs):
        user = self.context["request"].user
        return merge_guest_into_user(session_id=self.validated_data["session_id"], user_id=user.id)

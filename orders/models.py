from decimal import Decimal

from common.choices import DeliveryState, PaymentState
from common.frozen import FrozenFieldsMixin
from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Order(FrozenFieldsMixin, TimeStampedModel):
    """Permanent record of a finalized checkout session.

    Line items, shipping, payment and money fields are copied from the
    session when the order is created and never change afterwards. Only the
    delivery state moves, from pending to delivered.
    """

    frozen_fields = (
        "user_id",
        "checkout_id",
        "order_items",
        "address",
        "city",
        "postal_code",
        "country",
        "payment_method",
        "items_price",
        "shipping_price",
        "tax_price",
        "total_price",
        "is_paid",
        "paid_at",
        "payment_state",
        "payment_details",
        "source_build_id",
        "is_build_order",
    )
    forward_only = {"delivery_state": tuple(DeliveryState.values)}

    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="orders", on_delete=models.CASCADE)
    checkout = models.OneToOneField(
        "checkout.CheckoutSession", related_name="order", null=True, blank=True, on_delete=models.SET_NULL
    )
    number = models.CharField(max_length=32, unique=True, null=True, blank=True, db_index=True)
    email = models.EmailField(null=True, blank=True)
    order_items = models.JSONField(default=list)
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    postal_code = models.CharField(max_length=20)
    country = models.CharField(max_length=100)
    payment_method = models.CharField(max_length=50)
    items_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    shipping_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    is_paid = models.BooleanField(default=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    payment_state = models.CharField(max_length=16, choices=PaymentState.choices, default=PaymentState.PAID)
    payment_details = models.JSONField(null=True, blank=True)
    delivery_state = models.CharField(
        max_length=16, choices=DeliveryState.choices, default=DeliveryState.PENDING, db_index=True
    )
    delivered_at = models.DateTimeField(null=True, blank=True)
    source_build = models.ForeignKey(
        "builds.PcBuild", related_name="orders", null=True, blank=True, on_delete=models.SET_NULL
    )
    is_build_order = models.BooleanField(default=False)

    class Meta:
        ordering = ["-id"]
        indexes = [
            models.Index(fields=["user", "delivery_state", "created_at"]),
        ]
        constraints = [
            models.CheckConstraint(name="order_total_non_negative", condition=models.Q(total_price__gte=0)),
            models.CheckConstraint(
                name="order_delivered_has_delivered_at",
                condition=models.Q(delivery_state=DeliveryState.PENDING) | models.Q(delivered_at__isnull=False),
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Order#{self.id} user={self.user_id} delivery={self.delivery_state}"

    @property
    def is_delivered(self) -> bool:
        return self.delivery_state == DeliveryState.DELIVERED

    @property
    def shipping_address(self) -> dict:
        return {
            "address": self.address,
            "city": self.city,
            "postal_code": self.postal_code,
            "country": self.country,
        }

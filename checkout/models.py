from decimal import Decimal

from common.choices import FinalizationState, PaymentState
from common.frozen import FrozenFieldsMixin
from django.conf import settings
from django.db import models

from .snapshots import from_document

SHIPPING_FIELDS = ("address", "city", "postal_code", "country")


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class CheckoutSession(FrozenFieldsMixin, TimeStampedModel):
    """A purchase in progress: frozen line snapshot, shipping and total.

    Line items, shipping details, payment method and total are fixed when
    the session is created. Payment moves pending -> paid and finalization
    open -> finalized; neither goes back.
    """

    STATE_PENDING = PaymentState.PENDING
    STATE_PAID = PaymentState.PAID
    STATE_OPEN = FinalizationState.OPEN
    STATE_FINALIZED = FinalizationState.FINALIZED

    frozen_fields = (
        "user_id",
        "line_items",
        "address",
        "city",
        "postal_code",
        "country",
        "payment_method",
        "total_price",
        "source_build_id",
        "is_build_checkout",
    )
    forward_only = {
        "payment_state": tuple(PaymentState.values),
        "finalization_state": tuple(FinalizationState.values),
    }

    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="checkouts", on_delete=models.CASCADE)
    line_items = models.JSONField(default=list)
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    postal_code = models.CharField(max_length=20)
    country = models.CharField(max_length=100)
    payment_method = models.CharField(max_length=50)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    payment_state = models.CharField(
        max_length=16, choices=PaymentState.choices, default=PaymentState.PENDING, db_index=True
    )
    paid_at = models.DateTimeField(null=True, blank=True)
    payment_details = models.JSONField(null=True, blank=True)
    finalization_state = models.CharField(
        max_length=16, choices=FinalizationState.choices, default=FinalizationState.OPEN, db_index=True
    )
    finalized_at = models.DateTimeField(null=True, blank=True)
    source_build = models.ForeignKey(
        "builds.PcBuild", related_name="checkouts", null=True, blank=True, on_delete=models.SET_NULL
    )
    is_build_checkout = models.BooleanField(default=False)

    class Meta:
        ordering = ["-id"]
        indexes = [
            models.Index(fields=["user", "created_at"]),
        ]
        constraints = [
            models.CheckConstraint(name="checkout_total_non_negative", condition=models.Q(total_price__gte=0)),
            models.CheckConstraint(
                name="checkout_paid_has_paid_at",
                condition=models.Q(payment_state=PaymentState.PENDING) | models.Q(paid_at__isnull=False),
            ),
            models.CheckConstraint(
                name="checkout_finalized_requires_paid",
                condition=models.Q(finalization_state=FinalizationState.OPEN)
                | models.Q(payment_state=PaymentState.PAID, finalized_at__isnull=False),
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Checkout#{self.id} user={self.user_id} {self.payment_state}/{self.finalization_state}"

    @property
    def is_paid(self) -> bool:
        return self.payment_state == PaymentState.PAID

    @property
    def is_finalized(self) -> bool:
        return self.finalization_state == FinalizationState.FINALIZED

    @property
    def shipping_address(self) -> dict:
        return {name: getattr(self, name) for name in SHIPPING_FIELDS}

    @property
    def items_total(self) -> Decimal:
        return sum((line.line_total for line in self.snapshot_lines()), Decimal("0.00"))

    def snapshot_lines(self):
        return from_document(self.line_items)

"""Cart app models.

A cart is owned by either a user or a guest session, never both. Each line
is either a catalog product or a priced PC build; its price is a snapshot
taken when the line was first added.
"""

from decimal import Decimal

from django.conf import settings
from django.db import models

from .lines import LINE_BUILD, LINE_CATALOG, LineKey
from .owners import GuestOwner, UserOwner


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Cart(TimeStampedModel):
    """Shopping cart bound to a user or to a guest session.

    `total_price` is derived and recomputed by every cart mutation.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, related_name="carts", null=True, blank=True, on_delete=models.CASCADE
    )
    session_id = models.CharField(max_length=64, null=True, blank=True)
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["-updated_at"]
        constraints = [
            models.CheckConstraint(
                name="cart_single_owner",
                condition=(
                    models.Q(user__isnull=False, session_id__isnull=True)
                    | models.Q(user__isnull=True, session_id__isnull=False)
                ),
            ),
            models.UniqueConstraint(fields=["user"], condition=models.Q(user__isnull=False), name="unique_user_cart"),
            models.UniqueConstraint(
                fields=["session_id"], condition=models.Q(session_id__isnull=False), name="unique_guest_cart"
            ),
            models.CheckConstraint(name="cart_total_non_negative", condition=models.Q(total_price__gte=0)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Cart#{self.id} ({self.user_id or self.session_id})"

    @property
    def owner(self):
        if self.user_id is not None:
            return UserOwner(user_id=self.user_id)
        return GuestOwner(session_id=self.session_id)


class CartItem(TimeStampedModel):
    """Line item in a cart: a catalog product or a PC build."""

    cart = models.ForeignKey(Cart, related_name="items", on_delete=models.CASCADE)
    product = models.ForeignKey(
        "catalog.Product", related_name="cart_items", null=True, blank=True, on_delete=models.PROTECT
    )
    build = models.ForeignKey(
        "builds.PcBuild", related_name="cart_items", null=True, blank=True, on_delete=models.CASCADE
    )
    name = models.CharField(max_length=200)
    image = models.CharField(max_length=500, blank=True)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    quantity = models.PositiveIntegerField(default=1)
    size = models.CharField(max_length=32, blank=True, default="")
    color = models.CharField(max_length=32, blank=True, default="")
    is_build = models.BooleanField(default=False)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                name="cartitem_product_xor_build",
                condition=(
                    models.Q(product__isnull=False, build__isnull=True, is_build=False)
                    | models.Q(product__isnull=True, build__isnull=False, is_build=True)
                ),
            ),
            models.CheckConstraint(name="cartitem_quantity_positive", condition=models.Q(quantity__gte=1)),
            models.CheckConstraint(name="cartitem_price_non_negative", condition=models.Q(unit_price__gte=0)),
            models.UniqueConstraint(
                fields=["cart", "product", "size", "color"],
                condition=models.Q(product__isnull=False),
                name="unique_product_line_per_cart",
            ),
            models.UniqueConstraint(
                fields=["cart", "build", "size", "color"],
                condition=models.Q(build__isnull=False),
                name="unique_build_line_per_cart",
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"CartItem#{self.id} cart={self.cart_id} {self.kind}={self.ref_id} qty={self.quantity}"

    @property
    def kind(self) -> str:
        return LINE_BUILD if self.is_build else LINE_CATALOG

    @property
    def ref_id(self) -> int:
        return self.build_id if self.is_build else self.product_id

    @property
    def identity_key(self) -> LineKey:
        if self.is_build:
            return LineKey.build(self.build_id, self.size, self.color)
        return LineKey.catalog(self.product_id, self.size, self.color)

    @property
    def line_total(self) -> Decimal:
        return (self.unit_price or Decimal("0.00")) * Decimal(int(self.quantity))

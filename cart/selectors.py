"""Selectors for cart reads.

`get_cart_view` is what API callers see: it never raises, and an owner
without a cart gets an empty view with a zero total.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from common.money import ZERO

from .models import Cart
from .owners import GuestOwner, Owner, UserOwner


@dataclass(frozen=True)
class CartLineView:
    kind: str
    product_id: Optional[int]
    build_id: Optional[int]
    name: str
    image: str
    unit_price: Decimal
    quantity: int
    size: str
    color: str
    is_build: bool

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * Decimal(self.quantity)


@dataclass(frozen=True)
class CartView:
    id: Optional[int]
    owner: Optional[Owner]
    lines: Tuple[CartLineView, ...]
    total_price: Decimal

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def user_id(self) -> Optional[int]:
        return self.owner.user_id if isinstance(self.owner, UserOwner) else None

    @property
    def session_id(self) -> Optional[str]:
        return self.owner.session_id if isinstance(self.owner, GuestOwner) else None


def empty_cart_view(owner: Optional[Owner] = None) -> CartView:
    return CartView(id=None, owner=owner, lines=(), total_price=ZERO)


def find_cart(owner: Owner) -> Optional[Cart]:
    return Cart.objects.filter(**owner.cart_lookup()).first()


def get_cart_for_update(owner: Owner) -> Optional[Cart]:
    """Lock and return the owner's cart, or None. Call inside a transaction."""

    return Cart.objects.select_for_update().filter(**owner.cart_lookup()).first()


def get_or_create_cart_for_update(owner: Owner) -> Cart:
    """Return the owner's cart, creating it on first use, locked for update."""

    cart, _ = Cart.objects.get_or_create(**owner.cart_lookup())
    return Cart.objects.select_for_update().get(pk=cart.pk)


def cart_view(cart: Optional[Cart], owner: Optional[Owner] = None) -> CartView:
    if cart is None:
        return empty_cart_view(owner)
    lines = tuple(
        CartLineView(
            kind=item.kind,
            product_id=item.product_id,
            build_id=item.build_id,
            name=item.name,
            image=item.image,
            unit_price=item.unit_price,
            quantity=int(item.quantity),
            size=item.size,
            color=item.color,
            is_build=item.is_build,
        )
        for item in cart.items.order_by("id")
    )
    return CartView(id=cart.id, owner=cart.owner, lines=lines, total_price=cart.total_price)


def get_cart_view(owner: Optional[Owner]) -> CartView:
    """Return the owner's cart, or an empty cart when there is none."""

    if owner is None:
        return empty_cart_view()
    return cart_view(find_cart(owner), owner)

"""Cart services: line mutations and the guest-to-user merge.

Every public function runs in one transaction and locks the owner's cart
row first, so concurrent mutations for the same owner are applied one at a
time and `total_price` is always recomputed from the lines it sees.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from builds.pricing import price_build
from builds.selectors import can_access_build, get_build
from catalog.selectors import get_product
from common.exceptions import BuildNotAuthorized, CartNotFound, LineNotFound
from common.money import lines_total, normalize_quantity, require_positive_quantity
from django.db import transaction

from .lines import LineKey
from .models import Cart, CartItem
from .owners import GuestOwner, Owner, UserOwner, user_id_of
from .selectors import CartView, cart_view, find_cart, get_cart_for_update, get_or_create_cart_for_update

logger = logging.getLogger("rigforge.cart")


def recalculate_total(cart: Cart) -> Cart:
    """Recompute and store the cart total from its current lines."""

    cart.total_price = lines_total(CartItem.objects.filter(cart=cart))
    cart.save(update_fields=["total_price", "updated_at"])
    return cart


def _find_line(cart: Cart, key: LineKey) -> Optional[CartItem]:
    return CartItem.objects.select_for_update().filter(cart=cart, **key.lookup()).first()


def _require_cart(owner: Owner) -> Cart:
    cart = get_cart_for_update(owner)
    if cart is None:
        raise CartNotFound(**owner.log_context())
    return cart


def _require_line(cart: Cart, key: LineKey) -> CartItem:
    item = _find_line(cart, key)
    if item is None:
        raise LineNotFound(**key.as_dict())
    return item


@transaction.atomic
def add_line(*, owner: Owner, product_id, quantity=1, size: str = "", color: str = "") -> Cart:
    """Add a catalog product to the owner's cart.

    The product's current name, first image and price are copied onto a new
    line. If a line with the same product, size and color exists its quantity
    is increased instead.
    """

    quantity = require_positive_quantity(quantity)
    product = get_product(product_id)
    cart = get_or_create_cart_for_update(owner)
    key = LineKey.catalog(product.id, size, color)

    item = _find_line(cart, key)
    if item is not None:
        item.quantity = int(item.quantity) + quantity
        item.save(update_fields=["quantity", "updated_at"])
        event = "cart.item_incremented"
    else:
        item = CartItem.objects.create(
            cart=cart,
            product_id=product.id,
            name=product.name,
            image=product.image,
            unit_price=product.price,
            quantity=quantity,
            size=key.size,
            color=key.color,
        )
        event = "cart.item_added"
    recalculate_total(cart)
    logger.info(
        event,
        extra={
            "event": event,
            "cart_id": cart.id,
            "product_id": product.id,
            "quantity": int(item.quantity),
            **owner.log_context(),
        },
    )
    return cart


@transaction.atomic
def add_build_line(*, owner: Owner, build_id, quantity=1) -> Cart:
    """Add a PC build to the cart as a single line priced from its components.

    Only the build's creator may add a private build; public builds can be
    added by anyone, guests included.
    """

    quantity = require_positive_quantity(quantity)
    build = get_build(build_id)
    if not can_access_build(build, user_id_of(owner)):
        raise BuildNotAuthorized(build_id=build.id)
    quote = price_build(build)
    cart = get_or_create_cart_for_update(owner)
    key = LineKey.build(build.id)

    item = _find_line(cart, key)
    if item is not None:
        item.quantity = int(item.quantity) + quantity
        item.save(update_fields=["quantity", "updated_at"])
        event = "cart.build_incremented"
    else:
        item = CartItem.objects.create(
            cart=cart,
            build_id=build.id,
            name=quote.name,
            image=quote.image,
            unit_price=quote.total_price,
            quantity=quantity,
            is_build=True,
        )
        event = "cart.build_added"
    recalculate_total(cart)
    logger.info(
        event,
        extra={
            "event": event,
            "cart_id": cart.id,
            "build_id": build.id,
            "unit_price": str(item.unit_price),
            "quantity": int(item.quantity),
            "unresolved_components": list(quote.unresolved),
            **owner.log_context(),
        },
    )
    return cart


@transaction.atomic
def update_line_quantity(*, owner: Owner, key: LineKey, quantity) -> Cart:
    """Set a line's quantity; zero or less removes the line."""

    quantity = normalize_quantity(quantity)
    cart = _require_cart(owner)
    item = _require_line(cart, key)
    if quantity > 0:
        item.quantity = quantity
        item.save(update_fields=["quantity", "updated_at"])
        event = "cart.item_updated"
    else:
        item.delete()
        event = "cart.item_removed"
    recalculate_total(cart)
    logger.info(
        event,
        extra={"event": event, "cart_id": cart.id, "quantity": quantity, **key.as_dict(), **owner.log_context()},
    )
    return cart


@transaction.atomic
def remove_line(*, owner: Owner, key: LineKey) -> Cart:
    """Remove a line. The cart itself is kept, even when it ends up empty."""

    cart = _require_cart(owner)
    item = _require_line(cart, key)
    item.delete()
    recalculate_total(cart)
    logger.info(
        "cart.item_removed",
        extra={"event": "cart.item_removed", "cart_id": cart.id, **key.as_dict(), **owner.log_context()},
    )
    return cart


@transaction.atomic
def clear_cart(*, owner: Owner) -> Optional[Cart]:
    """Remove every line from the owner's cart. No-op when there is no cart."""

    cart = get_cart_for_update(owner)
    if cart is None:
        return None
    CartItem.objects.filter(cart=cart).delete()
    recalculate_total(cart)
    logger.info("cart.cleared", extra={"event": "cart.cleared", "cart_id": cart.id, **owner.log_context()})
    return cart


class MergeOutcome(Enum):
    NO_GUEST_CART = "no_guest_cart"
    GUEST_CART_EMPTY = "guest_cart_empty"
    GUEST_ONLY = "guest_only"
    BOTH_EXIST = "both_exist"


@dataclass(frozen=True)
class MergeResult:
    outcome: MergeOutcome
    cart: CartView


@transaction.atomic
def merge_guest_into_user(*, session_id: str, user_id: int) -> MergeResult:
    """Fold a guest session's cart into the user's cart at login.

    The guest cart row is locked first and deleted once its lines are moved,
    so a retried or concurrent merge finds no guest cart and does nothing.
    Any failure rolls back the whole merge, leaving both carts as they were.
    """

    guest_owner = GuestOwner(session_id=session_id)
    user_owner = UserOwner(user_id=user_id)

    guest = get_cart_for_update(guest_owner)
    if guest is None:
        return MergeResult(MergeOutcome.NO_GUEST_CART, cart_view(find_cart(user_owner), user_owner))

    guest_items = list(CartItem.objects.select_for_update().filter(cart=guest).order_by("id"))
    if not guest_items:
        guest.delete()
        logger.info(
            "cart.merge_skipped",
            extra={"event": "cart.merge_skipped", "session_id": session_id, "user_id": user_id},
        )
        return MergeResult(MergeOutcome.GUEST_CART_EMPTY, cart_view(find_cart(user_owner), user_owner))

    user_cart = get_cart_for_update(user_owner)
    if user_cart is None:
        # The guest cart becomes the user's cart as-is.
        guest.user_id = user_id
        guest.session_id = None
        guest.save(update_fields=["user", "session_id", "updated_at"])
        logger.info(
            "cart.merged",
            extra={
                "event": "cart.merged",
                "outcome": MergeOutcome.GUEST_ONLY.value,
                "dest_cart_id": guest.id,
                "session_id": session_id,
                "user_id": user_id,
            },
        )
        return MergeResult(MergeOutcome.GUEST_ONLY, cart_view(guest, user_owner))

    for guest_item in guest_items:
        existing = _find_line(user_cart, guest_item.identity_key)
        if existing is not None:
            existing.quantity = int(existing.quantity) + int(guest_item.quantity)
            existing.save(update_fields=["quantity", "updated_at"])
        else:
            guest_item.cart = user_cart
            guest_item.save(update_fields=["cart", "updated_at"])
    src_id = guest.id
    guest.delete()
    recalculate_total(user_cart)
    logger.info(
        "cart.merged",
        extra={
            "event": "cart.merged",
            "outcome": MergeOutcome.BOTH_EXIST.value,
            "src_cart_id": src_id,
            "dest_cart_id": user_cart.id,
            "session_id": session_id,
            "user_id": user_id,
        },
    )
    return MergeResult(MergeOutcome.BOTH_EXIST, cart_view(user_cart, user_owner))

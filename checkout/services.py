"""Checkout session services.

A session is created from either the client's cart snapshot (cross-checked
against the client's declared total) or a PC build (priced on the server).
It is then paid and finalized into exactly one order. Every rule is checked
before anything is written.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional

from builds.compatibility import check_compatibility, compatibility_status
from builds.pricing import price_build
from builds.selectors import build_exists, get_accessible_build
from catalog.selectors import product_exists
from common.choices import FinalizationState, PaymentState
from common.exceptions import (
    AlreadyFinalized,
    BuildNotFound,
    CheckoutNotAuthorized,
    CheckoutNotFound,
    ComponentsOutOfStock,
    InvalidPaymentStatus,
    PaymentAmountMismatch,
    PaymentRequired,
    ProductNotFound,
    TotalMismatch,
    ValidationFailed,
    json_safe,
)
from common.money import (
    amounts_match,
    lines_total,
    normalize_amount,
    parse_amount,
    require_positive_quantity,
    signed_difference,
)
from django.db import transaction
from django.utils import timezone
from orders.services import materialize_order

from .models import SHIPPING_FIELDS, CheckoutSession
from .snapshots import LineSnapshot, to_document

logger = logging.getLogger("rigforge.checkout")


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _missing_shipping_fields(shipping_address: Optional[Mapping], payment_method: Any) -> List[str]:
    shipping_address = shipping_address if isinstance(shipping_address, Mapping) else {}
    missing = [f"shipping_address.{name}" for name in SHIPPING_FIELDS if _blank(shipping_address.get(name))]
    if _blank(payment_method):
        missing.append("payment_method")
    return missing


def _shipping_values(shipping_address: Mapping) -> dict:
    return {name: str(shipping_address[name]).strip() for name in SHIPPING_FIELDS}


def _parse_line(index: int, raw: Any) -> LineSnapshot:
    """Validate one client-supplied line and return its snapshot."""

    prefix = f"checkout_items[{index}]"
    if not isinstance(raw, Mapping):
        raise ValidationFailed("Each checkout item must be an object.", field=prefix)

    price = raw.get("unit_price", raw.get("price"))
    product_id = raw.get("product_id")
    build_id = raw.get("build_id")
    missing = []
    if _blank(raw.get("name")):
        missing.append(f"{prefix}.name")
    if product_id is None and build_id is None:
        missing.append(f"{prefix}.product_id")
    if price is None:
        missing.append(f"{prefix}.unit_price")
    if raw.get("quantity") is None:
        missing.append(f"{prefix}.quantity")
    if missing:
        raise ValidationFailed("Checkout item is missing required fields.", missing=missing)

    unit_price = normalize_amount(price, field=f"{prefix}.unit_price")
    quantity = require_positive_quantity(raw.get("quantity"), field=f"{prefix}.quantity")
    if build_id is not None:
        if not build_exists(build_id):
            raise BuildNotFound(build_id=str(build_id))
    elif not product_exists(product_id):
        raise ProductNotFound(product_id=str(product_id))

    return LineSnapshot(
        name=str(raw["name"]).strip(),
        unit_price=unit_price,
        quantity=quantity,
        image=str(raw.get("image") or ""),
        product_id=int(product_id) if product_id is not None else None,
        build_id=int(build_id) if build_id is not None else None,
        size=str(raw.get("size") or "").strip(),
        color=str(raw.get("color") or "").strip(),
        is_build=build_id is not None,
    )


@transaction.atomic
def create_from_cart(
    *,
    user_id: int,
    lines: Optional[Iterable[Any]],
    shipping_address: Optional[Mapping],
    payment_method: Optional[str],
    declared_total: Any,
) -> CheckoutSession:
    """Open a checkout for the lines the client is buying.

    The client's declared total must agree with the sum of its lines to
    within one cent; the session then stores that total and the validated
    lines unchanged for the rest of its life.
    """

    lines = list(lines or [])
    missing = []
    if not lines:
        missing.append("checkout_items")
    missing += _missing_shipping_fields(shipping_address, payment_method)
    if declared_total is None or (isinstance(declared_total, str) and not declared_total.strip()):
        missing.append("total_price")
    if missing:
        raise ValidationFailed("Missing required fields.", missing=missing)

    snapshot = [_parse_line(index, raw) for index, raw in enumerate(lines)]
    declared = parse_amount(declared_total, field="total_price")
    expected = lines_total(snapshot)
    if not amounts_match(declared, expected):
        raise TotalMismatch(declared=declared, expected=expected, difference=signed_difference(declared, expected))

    checkout = CheckoutSession.objects.create(
        user_id=user_id,
        line_items=to_document(snapshot),
        payment_method=str(payment_method).strip(),
        total_price=normalize_amount(declared, field="total_price"),
        **_shipping_values(shipping_address),
    )
    logger.info(
        "checkout.created",
        extra={
            "event": "checkout.created",
            "checkout_id": checkout.id,
            "user_id": user_id,
            "source": "cart",
            "lines": len(snapshot),
            "total_price": str(checkout.total_price),
        },
    )
    return checkout


def _component_snapshots(quote) -> List[LineSnapshot]:
    return [
        LineSnapshot(
            name=line.name,
            unit_price=line.unit_price,
            quantity=line.quantity,
            image=line.image,
            product_id=line.product_id,
        )
        for line in quote.lines
    ]


@transaction.atomic
def create_from_build(
    *, user_id: int, build_id, shipping_address: Optional[Mapping], payment_method: Optional[str]
) -> CheckoutSession:
    """Open a checkout for a PC build, priced from its components.

    Any total the client sends is ignored; the server-side quote is the
    total.
    """

    missing = _missing_shipping_fields(shipping_address, payment_method)
    if missing:
        raise ValidationFailed("Missing required fields.", missing=missing)
    build = get_accessible_build(build_id, user_id)
    quote = price_build(build)
    if quote.is_empty:
        raise ValidationFailed("Build has no available components.", build_id=build.id)

    snapshot = _component_snapshots(quote)
    checkout = CheckoutSession.objects.create(
        user_id=user_id,
        line_items=to_document(snapshot),
        payment_method=str(payment_method).strip(),
        total_price=quote.total_price,
        source_build=build,
        is_build_checkout=True,
        **_shipping_values(shipping_address),
    )
    logger.info(
        "checkout.created",
        extra={
            "event": "checkout.created",
            "checkout_id": checkout.id,
            "user_id": user_id,
            "source": "build",
            "build_id": build.id,
            "lines": len(snapshot),
            "unresolved_components": list(quote.unresolved),
            "total_price": str(checkout.total_price),
        },
    )
    return checkout


def preview_build_checkout(*, user_id: int, build_id) -> dict:
    """Price a build for checkout without creating anything.

    Raises `ComponentsOutOfStock` when a component's product has fewer
    units in stock than the build needs.
    """

    build = get_accessible_build(build_id, user_id)
    quote = price_build(build)
    short = [
        {
            "product_id": line.product_id,
            "name": line.name,
            "required": line.quantity,
            "available": line.count_in_stock,
        }
        for line in quote.lines
        if line.count_in_stock < line.quantity
    ]
    if short:
        raise ComponentsOutOfStock(out_of_stock_items=short)

    issues = check_compatibility(build)
    return {
        "build": {
            "id": build.id,
            "name": build.name,
            "description": build.description,
            "build_type": build.build_type,
            "is_public": build.is_public,
            "user_id": build.user_id,
        },
        "checkout_items": to_document(_component_snapshots(quote)),
        "total_price": quote.total_price,
        "image": quote.image,
        "unresolved_components": list(quote.unresolved),
        "compatibility": {
            "status": compatibility_status(issues),
            "issues": [issue.as_dict() for issue in issues],
        },
    }


def get_checkout_for_owner(*, checkout_id, user_id: int, for_update: bool = False) -> CheckoutSession:
    qs = CheckoutSession.objects.all()
    if for_update:
        qs = qs.select_for_update()
    try:
        checkout = qs.get(id=int(checkout_id))
    except (CheckoutSession.DoesNotExist, TypeError, ValueError):
        raise CheckoutNotFound(checkout_id=str(checkout_id))
    if checkout.user_id != user_id:
        raise CheckoutNotAuthorized(checkout_id=checkout.id)
    return checkout


@transaction.atomic
def record_payment(*, checkout_id, user_id: int, status: Any, payment_details: Optional[dict] = None):
    """Mark a session paid.

    Repeating the call is harmless: the first `paid_at` is kept and the
    latest payment details replace the stored ones. If the details carry
    an `amount` it must match the session total within one cent.
    """

    checkout = get_checkout_for_owner(checkout_id=checkout_id, user_id=user_id, for_update=True)
    if status != PaymentState.PAID.value:
        raise InvalidPaymentStatus(status=None if status is None else str(status))
    if checkout.is_finalized:
        raise AlreadyFinalized(checkout_id=checkout.id)
    if payment_details is not None and not isinstance(payment_details, Mapping):
        raise ValidationFailed("payment_details must be an object.", field="payment_details")

    amount = (payment_details or {}).get("amount")
    if not _blank(amount):
        paid_amount = parse_amount(amount, field="payment_details.amount")
        if not amounts_match(paid_amount, checkout.total_price):
            raise PaymentAmountMismatch(
                checkout_total=checkout.total_price,
                payment_amount=paid_amount,
                difference=signed_difference(paid_amount, checkout.total_price),
            )

    first_payment = not checkout.is_paid
    if first_payment:
        checkout.payment_state = PaymentState.PAID
        checkout.paid_at = timezone.now()
    checkout.payment_details = json_safe(dict(payment_details)) if payment_details is not None else None
    checkout.save(update_fields=["payment_state", "paid_at", "payment_details", "updated_at"])
    event = "checkout.paid" if first_payment else "checkout.payment_rerecorded"
    logger.info(event, extra={"event": event, "checkout_id": checkout.id, "user_id": user_id})
    return checkout


@transaction.atomic
def finalize(*, checkout_id, user_id: int):
    """Turn a paid session into its order.

    The row is locked, so two finalize calls for one session run one after
    the other and the second sees the session already finalized.
    """

    checkout = get_checkout_for_owner(checkout_id=checkout_id, user_id=user_id, for_update=True)
    if checkout.is_finalized:
        raise AlreadyFinalized(checkout_id=checkout.id)
    if not checkout.is_paid:
        raise PaymentRequired(checkout_id=checkout.id, payment_state=checkout.payment_state)

    order = materialize_order(checkout)
    checkout.finalization_state = FinalizationState.FINALIZED
    checkout.finalized_at = timezone.now()
    checkout.save(update_fields=["finalization_state", "finalized_at", "updated_at"])
    logger.info(
        "checkout.finalized",
        extra={"event": "checkout.finalized", "checkout_id": checkout.id, "order_id": order.id, "user_id": user_id},
    )
    return order

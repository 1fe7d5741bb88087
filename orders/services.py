import logging
from copy import deepcopy

from cart.owners import UserOwner
from cart.services import clear_cart
from common.choices import PaymentState
from common.exceptions import AlreadyFinalized
from common.money import ZERO
from django.db import IntegrityError, transaction

from .emails import send_order_confirmation_email
from .models import Order

logger = logging.getLogger("rigforge.orders")


def materialize_order(checkout) -> Order:
    """Create the order for a paid, still-open checkout session.

    Lines, shipping, payment method, total and payment details are copied
    from the session as they are; nothing is re-priced. Clearing the
    buyer's cart and the confirmation email run only after the surrounding
    transaction commits.
    """

    try:
        with transaction.atomic():
            order = Order.objects.create(
                user_id=checkout.user_id,
                checkout=checkout,
                email=getattr(checkout.user, "email", None) or None,
                order_items=deepcopy(checkout.line_items),
                address=checkout.address,
                city=checkout.city,
                postal_code=checkout.postal_code,
                country=checkout.country,
                payment_method=checkout.payment_method,
                items_price=checkout.total_price,
                shipping_price=ZERO,
                tax_price=ZERO,
                total_price=checkout.total_price,
                is_paid=True,
                paid_at=checkout.paid_at,
                payment_state=PaymentState.PAID,
                payment_details=deepcopy(checkout.payment_details),
                source_build_id=checkout.source_build_id,
                is_build_order=checkout.is_build_checkout,
            )
    except IntegrityError:
        # one order per checkout
        if Order.objects.filter(checkout_id=checkout.id).exists():
            raise AlreadyFinalized(checkout_id=checkout.id)
        raise
    order.number = f"ORD-{int(order.id):06d}"
    order.save(update_fields=["number"])
    logger.info(
        "order.created",
        extra={
            "event": "order.created",
            "order_id": order.id,
            "order_number": order.number,
            "checkout_id": checkout.id,
            "user_id": order.user_id,
            "total_price": str(order.total_price),
            "is_build_order": order.is_build_order,
        },
    )

    user_id, order_id = order.user_id, order.id
    transaction.on_commit(lambda: clear_owner_cart_best_effort(user_id=user_id, order_id=order_id))
    transaction.on_commit(lambda: send_order_confirmation_email(order))
    return order


def clear_owner_cart_best_effort(*, user_id: int, order_id: int) -> bool:
    """Empty the buyer's cart after an order was created.

    A failure here is logged as `order.cart_clear_failed` and reported via
    the return value; the order is already committed and stays valid.
    """

    try:
        clear_cart(owner=UserOwner(user_id=user_id))
    except Exception:
        logger.warning(
            "order.cart_clear_failed",
            exc_info=True,
            extra={"event": "order.cart_clear_failed", "order_id": order_id, "user_id": user_id},
        )
        return False
    logger.info("order.cart_cleared", extra={"event": "order.cart_cleared", "order_id": order_id, "user_id": user_id})
    return True

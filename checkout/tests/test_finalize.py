from decimal import Decimal

import pytest
from cart.models import Cart, CartItem
from cart.owners import UserOwner
from cart.selectors import get_cart_view
from cart.services import add_line
from cart.tests.factories import UserFactory
from catalog.tests.factories import ProductFactory
from checkout.services import create_from_cart, finalize, record_payment
from checkout.tests.factories import CheckoutSessionFactory, PaidCheckoutSessionFactory
from common.choices import FinalizationState, PaymentState
from common.exceptions import AlreadyFinalized, CheckoutNotAuthorized, FrozenFieldError, PaymentRequired
from orders.models import Order

SHIPPING = {"address": "12 Main St", "city": "Manila", "postal_code": "1000", "country": "PH"}


def _checkout_lines(view):
    return [
        {
            "product_id": line.product_id,
            "build_id": line.build_id,
            "name": line.name,
            "image": line.image,
            "unit_price": str(line.unit_price),
            "quantity": line.quantity,
        }
        for line in view.lines
    ]


@pytest.mark.django_db
def test_cart_to_order_happy_path(django_capture_on_commit_callbacks):
    user = UserFactory()
    owner = UserOwner(user.id)
    cpu = ProductFactory(price=Decimal("45000.00"))
    ssd = ProductFactory(price=Decimal("4999.99"))
    add_line(owner=owner, product_id=cpu.id, quantity=1)
    add_line(owner=owner, product_id=ssd.id, quantity=2)
    view = get_cart_view(owner)
    assert view.total_price == Decimal("54999.98")

    checkout = create_from_cart(
        user_id=user.id,
        lines=_checkout_lines(view),
        shipping_address=SHIPPING,
        payment_method="PayPal",
        declared_total="54999.98",
    )
    record_payment(
        checkout_id=checkout.id,
        user_id=user.id,
        status="paid",
        payment_details={"transaction_id": "PAY-77", "amount": "54999.98"},
    )
    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        order = finalize(checkout_id=checkout.id, user_id=user.id)

    assert len(callbacks) == 2
    checkout.refresh_from_db()
    order.refresh_from_db()
    assert checkout.is_finalized
    assert checkout.finalized_at is not None
    assert order.checkout_id == checkout.id
    assert order.number == f"ORD-{order.id:06d}"
    assert order.order_items == checkout.line_items
    assert order.total_price == checkout.total_price == Decimal("54999.98")
    assert order.shipping_address == SHIPPING
    assert order.payment_method == "PayPal"
    assert order.is_paid
    assert order.paid_at == checkout.paid_at
    assert order.payment_details == {"transaction_id": "PAY-77", "amount": "54999.98"}
    assert order.email == user.email
    assert not CartItem.objects.filter(cart__user=user).exists()
    assert Cart.objects.get(user=user).total_price == Decimal("0.00")


@pytest.mark.django_db
def test_order_keeps_snapshot_prices_after_catalog_change():
    product = ProductFactory(price=Decimal("1500.00"))
    line = {"product_id": product.id, "name": product.name, "image": "", "unit_price": "1500.00", "quantity": 2}
    checkout = PaidCheckoutSessionFactory(line_items=[line])
    product.price = Decimal("9999.00")
    product.save()

    order = finalize(checkout_id=checkout.id, user_id=checkout.user_id)

    assert order.order_items[0]["unit_price"] == "1500.00"
    assert order.total_price == Decimal("3000.00")


@pytest.mark.django_db
def test_finalize_unpaid_session_creates_no_order():
    checkout = CheckoutSessionFactory()

    with pytest.raises(PaymentRequired):
        finalize(checkout_id=checkout.id, user_id=checkout.user_id)
    assert not Order.objects.exists()
    checkout.refresh_from_db()
    assert checkout.finalization_state == FinalizationState.OPEN


@pytest.mark.django_db
def test_second_finalize_is_rejected_and_creates_one_order():
    checkout = PaidCheckoutSessionFactory()

    first = finalize(checkout_id=checkout.id, user_id=checkout.user_id)
    with pytest.raises(AlreadyFinalized):
        finalize(checkout_id=checkout.id, user_id=checkout.user_id)

    assert list(Order.objects.values_list("id", flat=True)) == [first.id]


@pytest.mark.django_db
def test_finalize_by_non_owner_is_forbidden():
    checkout = PaidCheckoutSessionFactory()

    with pytest.raises(CheckoutNotAuthorized):
        finalize(checkout_id=checkout.id, user_id=UserFactory().id)
    assert not Order.objects.exists()


@pytest.mark.django_db
def test_payment_after_finalize_is_rejected():
    checkout = PaidCheckoutSessionFactory()
    finalize(checkout_id=checkout.id, user_id=checkout.user_id)

    with pytest.raises(AlreadyFinalized):
        record_payment(checkout_id=checkout.id, user_id=checkout.user_id, status="paid")


@pytest.mark.django_db
def test_checkout_snapshot_fields_cannot_be_rewritten():
    checkout = CheckoutSessionFactory()
    checkout.refresh_from_db()

    checkout.total_price = Decimal("1.00")
    with pytest.raises(FrozenFieldError):
        checkout.save()

    checkout.refresh_from_db()
    checkout.line_items[0]["unit_price"] = "1.00"
    with pytest.raises(FrozenFieldError):
        checkout.save()


@pytest.mark.django_db
def test_checkout_states_only_move_forward():
    checkout = PaidCheckoutSessionFactory()
    order = finalize(checkout_id=checkout.id, user_id=checkout.user_id)
    checkout.refresh_from_db()

    checkout.payment_state = PaymentState.PENDING
    with pytest.raises(FrozenFieldError):
        checkout.save()

    checkout.refresh_from_db()
    checkout.finalization_state = FinalizationState.OPEN
    with pytest.raises(FrozenFieldError):
        checkout.save()

    order.total_price = Decimal("0.00")
    with pytest.raises(FrozenFieldError):
        order.save()

import logging
from decimal import Decimal

import pytest
from cart.models import Cart, CartItem
from cart.owners import UserOwner
from cart.services import add_line
from catalog.tests.factories import ProductFactory
from checkout.services import finalize
from checkout.tests.factories import PaidCheckoutSessionFactory
from common.exceptions import AlreadyFinalized
from django.core import mail
from orders import services as order_services
from orders.models import Order
from orders.services import clear_owner_cart_best_effort, materialize_order


@pytest.mark.django_db
def test_cart_clear_failure_is_logged_and_order_survives(monkeypatch, caplog, django_capture_on_commit_callbacks):
    checkout = PaidCheckoutSessionFactory()
    product = ProductFactory(price=Decimal("10.00"))
    add_line(owner=UserOwner(checkout.user_id), product_id=product.id, quantity=1)

    def boom(**kwargs):
        raise RuntimeError("cart store unavailable")

    monkeypatch.setattr(order_services, "clear_cart", boom)
    with caplog.at_level(logging.WARNING, logger="rigforge.orders"):
        with django_capture_on_commit_callbacks(execute=True):
            order = finalize(checkout_id=checkout.id, user_id=checkout.user_id)

    assert Order.objects.filter(id=order.id, checkout_id=checkout.id).exists()
    failures = [r for r in caplog.records if r.getMessage() == "order.cart_clear_failed"]
    assert len(failures) == 1
    assert failures[0].levelno == logging.WARNING
    assert failures[0].order_id == order.id
    assert failures[0].exc_info is not None
    assert CartItem.objects.filter(cart__user_id=checkout.user_id).count() == 1


@pytest.mark.django_db
def test_clear_without_cart_reports_success():
    checkout = PaidCheckoutSessionFactory()

    assert clear_owner_cart_best_effort(user_id=checkout.user_id, order_id=1) is True
    assert not Cart.objects.filter(user_id=checkout.user_id).exists()


@pytest.mark.django_db
def test_confirmation_email_sent_after_commit(django_capture_on_commit_callbacks, settings):
    settings.FRONTEND_URL = "https://shop.example.com/"
    checkout = PaidCheckoutSessionFactory()

    with django_capture_on_commit_callbacks(execute=True):
        order = finalize(checkout_id=checkout.id, user_id=checkout.user_id)

    assert len(mail.outbox) == 1
    message = mail.outbox[0]
    assert message.to == [checkout.user.email]
    assert order.number in message.subject
    assert f"https://shop.example.com/order/{order.id}" in message.body


@pytest.mark.django_db
def test_nothing_runs_before_commit():
    checkout = PaidCheckoutSessionFactory()
    product = ProductFactory()
    add_line(owner=UserOwner(checkout.user_id), product_id=product.id, quantity=1)

    finalize(checkout_id=checkout.id, user_id=checkout.user_id)

    assert len(mail.outbox) == 0
    assert CartItem.objects.filter(cart__user_id=checkout.user_id).count() == 1


@pytest.mark.django_db
def test_second_order_for_same_checkout_is_refused():
    checkout = PaidCheckoutSessionFactory()
    materialize_order(checkout)

    with pytest.raises(AlreadyFinalized):
        materialize_order(checkout)
    assert Order.objects.filter(checkout_id=checkout.id).count() == 1

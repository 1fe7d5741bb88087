from decimal import Decimal

import pytest
from cart.models import Cart, CartItem
from cart.owners import GuestOwner, UserOwner
from cart.services import MergeOutcome, add_line, merge_guest_into_user
from cart.tests.factories import UserFactory
from catalog.tests.factories import ProductFactory


def _lines(cart_id):
    return sorted(CartItem.objects.filter(cart_id=cart_id).values_list("product_id", "quantity"))


@pytest.mark.django_db
def test_guest_only_cart_is_reassigned_to_user():
    user = UserFactory()
    guest = GuestOwner("guest_a")
    p1 = ProductFactory(price=Decimal("100000.00"))
    p2 = ProductFactory(price=Decimal("50000.00"))
    add_line(owner=guest, product_id=p1.id, quantity=1)
    guest_cart = add_line(owner=guest, product_id=p2.id, quantity=2)
    assert guest_cart.total_price == Decimal("200000.00")

    result = merge_guest_into_user(session_id="guest_a", user_id=user.id)

    assert result.outcome is MergeOutcome.GUEST_ONLY
    assert result.cart.id == guest_cart.id
    assert result.cart.total_price == Decimal("200000.00")
    cart = Cart.objects.get(id=guest_cart.id)
    assert cart.user_id == user.id
    assert cart.session_id is None
    assert _lines(cart.id) == sorted([(p1.id, 1), (p2.id, 2)])
    assert not Cart.objects.filter(session_id="guest_a").exists()


@pytest.mark.django_db
def test_both_carts_sum_matching_lines_and_delete_guest_cart():
    user = UserFactory()
    owner = UserOwner(user.id)
    guest = GuestOwner("guest_b")
    p1 = ProductFactory(price=Decimal("10.00"))
    p3 = ProductFactory(price=Decimal("3.00"))
    user_cart = add_line(owner=owner, product_id=p1.id, quantity=1)
    add_line(owner=guest, product_id=p1.id, quantity=2)
    guest_cart = add_line(owner=guest, product_id=p3.id, quantity=1)

    result = merge_guest_into_user(session_id="guest_b", user_id=user.id)

    assert result.outcome is MergeOutcome.BOTH_EXIST
    assert result.cart.id == user_cart.id
    assert _lines(user_cart.id) == sorted([(p1.id, 3), (p3.id, 1)])
    assert result.cart.total_price == Decimal("33.00")
    assert Cart.objects.get(id=user_cart.id).total_price == Decimal("33.00")
    assert not Cart.objects.filter(id=guest_cart.id).exists()


@pytest.mark.django_db
def test_lines_with_different_size_are_not_summed():
    user = UserFactory()
    product = ProductFactory(price=Decimal("1.00"))
    add_line(owner=UserOwner(user.id), product_id=product.id, quantity=1, size="M")
    add_line(owner=GuestOwner("guest_c"), product_id=product.id, quantity=1, size="L")

    result = merge_guest_into_user(session_id="guest_c", user_id=user.id)

    sizes = sorted((line.size, line.quantity) for line in result.cart.lines)
    assert sizes == [("L", 1), ("M", 1)]


@pytest.mark.django_db
def test_retried_merge_is_a_noop():
    user = UserFactory()
    owner = UserOwner(user.id)
    product = ProductFactory(price=Decimal("5.00"))
    add_line(owner=owner, product_id=product.id, quantity=1)
    add_line(owner=GuestOwner("guest_d"), product_id=product.id, quantity=2)

    first = merge_guest_into_user(session_id="guest_d", user_id=user.id)
    second = merge_guest_into_user(session_id="guest_d", user_id=user.id)

    assert first.outcome is MergeOutcome.BOTH_EXIST
    assert second.outcome is MergeOutcome.NO_GUEST_CART
    assert second.cart == first.cart
    assert _lines(first.cart.id) == [(product.id, 3)]


@pytest.mark.django_db
def test_no_guest_cart_returns_user_cart_unchanged():
    user = UserFactory()
    product = ProductFactory(price=Decimal("5.00"))
    add_line(owner=UserOwner(user.id), product_id=product.id, quantity=4)

    result = merge_guest_into_user(session_id="guest_missing", user_id=user.id)

    assert result.outcome is MergeOutcome.NO_GUEST_CART
    assert result.cart.total_price == Decimal("20.00")


@pytest.mark.django_db
def test_empty_guest_cart_is_discarded():
    user = UserFactory()
    Cart.objects.create(session_id="guest_e")

    result = merge_guest_into_user(session_id="guest_e", user_id=user.id)

    assert result.outcome is MergeOutcome.GUEST_CART_EMPTY
    assert result.cart.id is None
    assert result.cart.is_empty
    assert not Cart.objects.filter(session_id="guest_e").exists()

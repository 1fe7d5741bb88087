import threading
from decimal import Decimal
from typing import List

import pytest
from cart.models import Cart, CartItem
from cart.owners import GuestOwner, UserOwner
from cart.services import MergeOutcome, add_line, merge_guest_into_user
from cart.tests.factories import UserFactory
from catalog.tests.factories import ProductFactory
from django.db import close_old_connections, connection


def _add_line_worker(barrier: threading.Barrier, owner, product_id: int, qty: int, successes: List[int], errors: List):
    # Each thread gets its own DB connection
    close_old_connections()
    barrier.wait()
    try:
        add_line(owner=owner, product_id=product_id, quantity=qty)
        successes.append(qty)
    except Exception as exc:  # pragma: no cover
        errors.append(exc)
    finally:
        connection.close()


def _merge_worker(barrier: threading.Barrier, session_id: str, user_id: int, outcomes: List, errors: List):
    close_old_connections()
    barrier.wait()
    try:
        outcomes.append(merge_guest_into_user(session_id=session_id, user_id=user_id).outcome)
    except Exception as exc:  # pragma: no cover
        errors.append(exc)
    finally:
        connection.close()


def _run(threads):
    for t in threads:
        t.start()
    for t in threads:
        t.join()


@pytest.mark.django_db(transaction=True)
def test_threaded_concurrent_add_line_same_owner_sums_quantities():
    if connection.vendor == "sqlite":
        pytest.skip("SQLite lacks real concurrent transactions; skipping threaded test.")
    user = UserFactory()
    owner = UserOwner(user.id)
    product = ProductFactory(price=Decimal("250.00"))
    # The cart row exists up front so every thread contends on its lock
    add_line(owner=owner, product_id=product.id, quantity=1)

    workers = 4
    barrier = threading.Barrier(workers)
    successes: List[int] = []
    errors: List = []
    threads = [
        threading.Thread(target=_add_line_worker, args=(barrier, owner, product.id, 2, successes, errors))
        for _ in range(workers)
    ]
    _run(threads)

    assert errors == []
    assert len(successes) == workers
    cart = Cart.objects.get(user=user)
    item = CartItem.objects.get(cart=cart)
    assert item.quantity == 1 + 2 * workers
    assert cart.total_price == Decimal("250.00") * item.quantity


@pytest.mark.django_db(transaction=True)
def test_threaded_concurrent_merge_counts_guest_lines_once():
    if connection.vendor == "sqlite":
        pytest.skip("SQLite lacks real concurrent transactions; skipping threaded test.")
    user = UserFactory()
    product = ProductFactory(price=Decimal("100.00"))
    session_id = "guest_1700000000000_abc123"
    add_line(owner=UserOwner(user.id), product_id=product.id, quantity=1)
    add_line(owner=GuestOwner(session_id), product_id=product.id, quantity=3)

    barrier = threading.Barrier(2)
    outcomes: List = []
    errors: List = []
    threads = [
        threading.Thread(target=_merge_worker, args=(barrier, session_id, user.id, outcomes, errors))
        for _ in range(2)
    ]
    _run(threads)

    assert errors == []
    assert sorted(o.value for o in outcomes) == sorted(
        [MergeOutcome.BOTH_EXIST.value, MergeOutcome.NO_GUEST_CART.value]
    )
    assert not Cart.objects.filter(session_id=session_id).exists()
    cart = Cart.objects.get(user=user)
    item = CartItem.objects.get(cart=cart)
    assert item.quantity == 4
    assert cart.total_price == Decimal("400.00")


@pytest.mark.django_db(transaction=True)
def test_retried_merge_after_success_is_a_no_op():
    user = UserFactory()
    product = ProductFactory(price=Decimal("100.00"))
    session_id = "guest_1700000000000_def456"
    add_line(owner=UserOwner(user.id), product_id=product.id, quantity=1)
    add_line(owner=GuestOwner(session_id), product_id=product.id, quantity=2)

    first = merge_guest_into_user(session_id=session_id, user_id=user.id)
    retry = merge_guest_into_user(session_id=session_id, user_id=user.id)

    assert first.outcome == MergeOutcome.BOTH_EXIST
    assert retry.outcome == MergeOutcome.NO_GUEST_CART
    assert retry.cart.total_price == Decimal("300.00")
    assert CartItem.objects.get(cart__user=user).quantity == 3

from decimal import Decimal

import pytest
from builds.tests.factories import PcBuildComponentFactory, PcBuildFactory
from cart.models import Cart
from cart.tests.factories import UserFactory
from catalog.tests.factories import ProductFactory
from rest_framework.test import APIClient


@pytest.mark.django_db
def test_guest_add_issues_session_id_and_subsequent_calls_use_it():
    product = ProductFactory(price=Decimal("250.00"))
    client = APIClient()

    r_add = client.post("/api/v1/cart/items/", {"product_id": product.id, "quantity": 2}, format="json")
    assert r_add.status_code == 201
    session_id = r_add["X-Session-Id"]
    assert session_id.startswith("guest_")
    body = r_add.json()
    assert body["session_id"] == session_id
    assert body["user_id"] is None
    assert body["total_price"] == "500.00"
    assert body["items"][0]["line_total"] == "500.00"

    r_detail = client.get("/api/v1/cart/", HTTP_X_SESSION_ID=session_id)
    assert r_detail.status_code == 200
    assert r_detail.json()["items"][0]["quantity"] == 2

    r_upd = client.patch(
        "/api/v1/cart/items/", {"product_id": product.id, "quantity": 5}, format="json", HTTP_X_SESSION_ID=session_id
    )
    assert r_upd.status_code == 200
    assert r_upd.json()["total_price"] == "1250.00"

    r_del = client.delete("/api/v1/cart/items/", {"product_id": product.id}, format="json", HTTP_X_SESSION_ID=session_id)
    assert r_del.status_code == 200
    assert r_del.json()["items"] == []
    assert r_del.json()["total_price"] == "0.00"
    assert Cart.objects.filter(session_id=session_id).exists()


@pytest.mark.django_db
def test_cart_detail_without_cart_is_empty():
    client = APIClient()
    r = client.get("/api/v1/cart/")
    assert r.status_code == 200
    assert r.json() == {"id": None, "user_id": None, "session_id": None, "items": [], "total_price": "0.00"}

    user = UserFactory()
    client.force_authenticate(user=user)
    r = client.get("/api/v1/cart/")
    assert r.status_code == 200
    assert r.json()["user_id"] == user.id
    assert r.json()["items"] == []


@pytest.mark.django_db
def test_authenticated_user_cart_ignores_session_header():
    user = UserFactory()
    product = ProductFactory(price=Decimal("10.00"))
    client = APIClient()
    client.force_authenticate(user=user)

    r = client.post(
        "/api/v1/cart/items/", {"product_id": product.id}, format="json", HTTP_X_SESSION_ID="guest_should_be_ignored"
    )

    assert r.status_code == 201
    assert "X-Session-Id" not in r
    assert r.json()["user_id"] == user.id
    assert not Cart.objects.filter(session_id="guest_should_be_ignored").exists()


@pytest.mark.django_db
@pytest.mark.parametrize("quantity", [0, -2, "two", 1.5])
def test_add_invalid_quantity_returns_invalid_amount(quantity):
    product = ProductFactory()
    client = APIClient()

    r = client.post(
        "/api/v1/cart/items/", {"product_id": product.id, "quantity": quantity}, format="json", HTTP_X_SESSION_ID="g1"
    )

    assert r.status_code == 400
    assert r.json()["error"] == "invalid_amount"
    assert r.json()["field"] == "quantity"


@pytest.mark.django_db
def test_add_unknown_product_returns_404():
    client = APIClient()
    r = client.post("/api/v1/cart/items/", {"product_id": 987654}, format="json", HTTP_X_SESSION_ID="g2")
    assert r.status_code == 404
    assert r.json()["error"] == "product_not_found"


@pytest.mark.django_db
def test_update_errors():
    product = ProductFactory()
    client = APIClient()

    r_missing_session = client.patch("/api/v1/cart/items/", {"product_id": product.id, "quantity": 1}, format="json")
    assert r_missing_session.status_code == 400
    assert r_missing_session.json()["error"] == "validation_failed"

    r_no_cart = client.patch(
        "/api/v1/cart/items/", {"product_id": product.id, "quantity": 1}, format="json", HTTP_X_SESSION_ID="g3"
    )
    assert r_no_cart.status_code == 404
    assert r_no_cart.json()["error"] == "cart_not_found"

    client.post("/api/v1/cart/items/", {"product_id": product.id}, format="json", HTTP_X_SESSION_ID="g3")
    r_no_line = client.patch(
        "/api/v1/cart/items/",
        {"product_id": product.id, "size": "XL", "quantity": 1},
        format="json",
        HTTP_X_SESSION_ID="g3",
    )
    assert r_no_line.status_code == 404
    assert r_no_line.json()["error"] == "line_not_found"

    r_both_keys = client.patch(
        "/api/v1/cart/items/",
        {"product_id": product.id, "build_id": 1, "quantity": 1},
        format="json",
        HTTP_X_SESSION_ID="g3",
    )
    assert r_both_keys.status_code == 400


@pytest.mark.django_db
def test_build_added_twice_is_one_line():
    user = UserFactory()
    build = PcBuildFactory(user=user)
    PcBuildComponentFactory(build=build, product=ProductFactory(price=Decimal("100000.00")), quantity=1)
    PcBuildComponentFactory(build=build, product=ProductFactory(price=Decimal("20000.00")), quantity=2)
    client = APIClient()
    client.force_authenticate(user=user)

    client.post("/api/v1/cart/builds/", {"build_id": build.id, "quantity": 1}, format="json")
    r = client.post("/api/v1/cart/builds/", {"build_id": build.id, "quantity": 1}, format="json")

    assert r.status_code == 201
    items = r.json()["items"]
    assert len(items) == 1
    assert items[0]["kind"] == "build"
    assert items[0]["is_build"] is True
    assert items[0]["unit_price"] == "140000.00"
    assert items[0]["quantity"] == 2
    assert items[0]["line_total"] == "280000.00"

    r_upd = client.patch("/api/v1/cart/items/", {"build_id": build.id, "quantity": 1}, format="json")
    assert r_upd.status_code == 200
    assert r_upd.json()["total_price"] == "140000.00"


@pytest.mark.django_db
def test_private_build_forbidden_for_other_users():
    build = PcBuildFactory(is_public=False)
    PcBuildComponentFactory(build=build)
    client = APIClient()
    client.force_authenticate(user=UserFactory())

    r = client.post("/api/v1/cart/builds/", {"build_id": build.id}, format="json")

    assert r.status_code == 403
    assert r.json()["error"] == "build_not_authorized"


@pytest.mark.django_db
def test_merge_requires_authentication():
    client = APIClient()
    r = client.post("/api/v1/cart/merge/", {"session_id": "guest_x"}, format="json")
    assert r.status_code == 401


@pytest.mark.django_db
def test_merge_endpoint_moves_guest_lines():
    product = ProductFactory(price=Decimal("40.00"))
    client = APIClient()
    r_add = client.post("/api/v1/cart/items/", {"product_id": product.id, "quantity": 2}, format="json")
    session_id = r_add["X-Session-Id"]

    user = UserFactory()
    client.force_authenticate(user=user)
    r = client.post("/api/v1/cart/merge/", HTTP_X_SESSION_ID=session_id)

    assert r.status_code == 200
    assert r.json()["outcome"] == "guest_only"
    assert r.json()["cart"]["user_id"] == user.id
    assert r.json()["cart"]["total_price"] == "80.00"

    r_again = client.post("/api/v1/cart/merge/", {"session_id": session_id}, format="json")
    assert r_again.json()["outcome"] == "no_guest_cart"
    assert r_again.json()["cart"]["total_price"] == "80.00"

import pytest
from cart.tests.factories import UserFactory
from common.choices import DeliveryState
from django.utils import timezone
from orders.tests.factories import OrderFactory
from rest_framework.test import APIClient


@pytest.mark.django_db
def test_list_returns_only_own_orders():
    user = UserFactory()
    mine = [OrderFactory(user=user), OrderFactory(user=user)]
    OrderFactory()
    client = APIClient()
    client.force_authenticate(user=user)

    r = client.get("/api/v1/orders/")
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 2
    assert [o["id"] for o in body["results"]] == [mine[1].id, mine[0].id]
    assert body["results"][0]["order_items"][0]["line_total"] == "3000.00"


@pytest.mark.django_db
def test_list_filters_by_delivery_state():
    user = UserFactory()
    OrderFactory(user=user)
    delivered = OrderFactory(user=user, delivery_state=DeliveryState.DELIVERED, delivered_at=timezone.now())
    client = APIClient()
    client.force_authenticate(user=user)

    r = client.get("/api/v1/orders/", {"delivery_state": "delivered"})
    assert r.status_code == 200
    assert [o["id"] for o in r.json()["results"]] == [delivered.id]
    assert r.json()["results"][0]["is_delivered"] is True


@pytest.mark.django_db
def test_detail_hides_other_users_orders():
    order = OrderFactory()
    client = APIClient()

    client.force_authenticate(user=order.user)
    r = client.get(f"/api/v1/orders/{order.id}/")
    assert r.status_code == 200
    assert r.json()["number"] == order.number
    assert r.json()["shipping_address"]["city"] == "Manila"

    client.force_authenticate(user=UserFactory())
    r_other = client.get(f"/api/v1/orders/{order.id}/")
    assert r_other.status_code == 404
    assert r_other.json()["error"] == "order_not_found"


@pytest.mark.django_db
def test_orders_require_authentication():
    assert APIClient().get("/api/v1/orders/").status_code in (401, 403)

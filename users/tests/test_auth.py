import pytest
from cart.tests.factories import UserFactory
from rest_framework.test import APIClient


@pytest.mark.django_db
def test_signin_token_authenticates_cart_requests():
    user = UserFactory(username="builder")
    client = APIClient()

    r = client.post("/api/v1/auth/signin/", {"username": "builder", "password": "pass"}, format="json")
    assert r.status_code == 200
    access = r.json()["access"]
    assert r.json()["refresh"]

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
    r_cart = client.get("/api/v1/cart/")
    assert r_cart.status_code == 200
    assert r_cart.json()["user_id"] == user.id


@pytest.mark.django_db
def test_signin_with_wrong_password_fails():
    UserFactory(username="builder")
    r = APIClient().post("/api/v1/auth/signin/", {"username": "builder", "password": "nope"}, format="json")
    assert r.status_code == 401


@pytest.mark.django_db
def test_refresh_issues_new_access_token():
    UserFactory(username="builder")
    client = APIClient()
    tokens = client.post("/api/v1/auth/signin/", {"username": "builder", "password": "pass"}, format="json").json()

    r = client.post("/api/v1/auth/refresh/", {"refresh": tokens["refresh"]}, format="json")
    assert r.status_code == 200
    assert r.json()["access"]

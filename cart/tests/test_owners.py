import pytest
from cart.lines import LineKey
from cart.owners import GuestOwner, UserOwner, new_guest_session_id, owner_from_request
from common.exceptions import ValidationFailed
from django.contrib.auth.models import AnonymousUser
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory


def _request(user=None, **extra):
    django_request = APIRequestFactory().get("/api/v1/cart/", **extra)
    request = Request(django_request)
    request.user = user or AnonymousUser()
    return request


class _User:
    id = 7
    is_authenticated = True


def test_authenticated_request_is_user_owner_even_with_session_header():
    owner = owner_from_request(_request(_User(), HTTP_X_SESSION_ID="guest_1"))
    assert owner == UserOwner(user_id=7)
    assert owner.cart_lookup() == {"user_id": 7, "session_id": None}


def test_guest_owner_from_header_or_query():
    assert owner_from_request(_request(HTTP_X_SESSION_ID="guest_1")) == GuestOwner("guest_1")
    assert owner_from_request(_request(data={"session_id": "guest_2"})) == GuestOwner("guest_2")


def test_missing_session_id():
    with pytest.raises(ValidationFailed):
        owner_from_request(_request())
    assert owner_from_request(_request(), required=False) is None
    created = owner_from_request(_request(), create=True)
    assert created.is_guest
    assert created.session_id.startswith("guest_")


def test_guest_owner_rejects_blank_and_overlong_ids():
    with pytest.raises(ValidationFailed):
        GuestOwner("  ")
    with pytest.raises(ValidationFailed):
        GuestOwner("g" * 65)


def test_new_guest_session_ids_are_distinct():
    assert new_guest_session_id() != new_guest_session_id()


def test_line_key_normalizes_size_and_color():
    assert LineKey.catalog(5, None, " red ") == LineKey.catalog("5", "", "red")
    assert LineKey.build(5) != LineKey.catalog(5)
    assert LineKey.build(5).lookup() == {"build_id": 5, "size": "", "color": ""}
    assert LineKey.catalog(3, "L", "red").as_dict() == {"product_id": 3, "size": "L", "color": "red"}

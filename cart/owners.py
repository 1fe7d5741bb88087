"""Cart ownership.

A cart belongs to exactly one of an authenticated user or an anonymous
guest session. The two cases are separate types so lookups never have to
guess which identifier is meaningful.
"""

import secrets
import time
from dataclasses import dataclass
from typing import Optional, Union

from common.exceptions import ValidationFailed

SESSION_HEADER = "X-Session-Id"
SESSION_ID_MAX_LENGTH = 64


@dataclass(frozen=True)
class UserOwner:
    user_id: int

    is_guest = False

    def cart_lookup(self) -> dict:
        return {"user_id": self.user_id, "session_id": None}

    def log_context(self) -> dict:
        return {"user_id": self.user_id, "guest": False}


@dataclass(frozen=True)
class GuestOwner:
    session_id: str

    is_guest = True

    def __post_init__(self):
        if not isinstance(self.session_id, str) or not self.session_id.strip():
            raise ValidationFailed("Guest session id is required.", missing=["session_id"])
        if len(self.session_id) > SESSION_ID_MAX_LENGTH:
            raise ValidationFailed("Guest session id is too long.", field="session_id")

    def cart_lookup(self) -> dict:
        return {"user": None, "session_id": self.session_id}

    def log_context(self) -> dict:
        return {"session_id": self.session_id, "guest": True}


Owner = Union[UserOwner, GuestOwner]


def user_id_of(owner: Optional[Owner]) -> Optional[int]:
    return owner.user_id if isinstance(owner, UserOwner) else None


def new_guest_session_id() -> str:
    """Return a fresh guest session id (``guest_<epoch millis>_<suffix>``)."""

    return f"guest_{int(time.time() * 1000)}_{secrets.token_hex(3)}"


def session_id_from_request(request) -> Optional[str]:
    """Read a guest session id from the header, the body, or the query string."""

    value = request.headers.get(SESSION_HEADER)
    if not value:
        data = getattr(request, "data", None)
        if hasattr(data, "get"):
            value = data.get("session_id")
    if not value:
        value = request.query_params.get("session_id")
    return value or None


def owner_from_request(request, *, create: bool = False, required: bool = True) -> Optional[Owner]:
    """Resolve the cart owner for an API request.

    Authenticated requests always act on the user's cart. Anonymous requests
    use the guest session id; with `create=True` a new one is issued when the
    caller has none yet.
    """

    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        return UserOwner(user_id=user.id)
    session_id = session_id_from_request(request)
    if session_id:
        return GuestOwner(session_id=str(session_id))
    if create:
        return GuestOwner(session_id=new_guest_session_id())
    if required:
        raise ValidationFailed(f"Missing {SESSION_HEADER}.", missing=["session_id"])
    return None

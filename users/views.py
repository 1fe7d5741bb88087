"""JWT sign-in and refresh for existing accounts."""

import logging

from drf_spectacular.utils import extend_schema
from rest_framework.throttling import ScopedRateThrottle
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

logger = logging.getLogger("rigforge.auth")


def log_auth_event(action: str, request, status: str) -> None:
    logger.info(
        f"auth.{action}",
        extra={"event": f"auth.{action}", "ip": request.META.get("REMOTE_ADDR"), "status": status},
    )


class SignInView(TokenObtainPairView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "signin"

    @extend_schema(tags=["User Endpoints"])
    def post(self, request, *args, **kwargs):
        resp = super().post(request, *args, **kwargs)
        log_auth_event("signin", request, "success" if resp.status_code == 200 else "failed")
        return resp


class RefreshView(TokenRefreshView):
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "token_refresh"

    @extend_schema(tags=["User Endpoints"])
    def post(self, request, *args, **kwargs):
        resp = super().post(request, *args, **kwargs)
        log_auth_event("token_refresh", request, "success" if resp.status_code == 200 else "failed")
        return resp

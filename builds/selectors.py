"""Read-only lookups for PC builds."""

from typing import Optional

from common.exceptions import BuildNotAuthorized, BuildNotFound
from django.db.models import Prefetch

from .models import PcBuild, PcBuildComponent


def get_build(build_id) -> PcBuild:
    """Return a build with its components, products and images loaded.

    Raises `BuildNotFound` for unknown or malformed ids.
    """

    components = PcBuildComponent.objects.select_related("product").prefetch_related("product__images")
    try:
        return PcBuild.objects.prefetch_related(Prefetch("components", queryset=components.order_by("id"))).get(
            id=int(build_id)
        )
    except (PcBuild.DoesNotExist, TypeError, ValueError):
        raise BuildNotFound(build_id=None if build_id is None else str(build_id))


def can_access_build(build: PcBuild, user_id: Optional[int]) -> bool:
    """Owners can always use their builds; everyone else only public ones."""

    if build.is_public:
        return True
    return user_id is not None and build.user_id == user_id


def get_accessible_build(build_id, user_id: Optional[int]) -> PcBuild:
    build = get_build(build_id)
    if not can_access_build(build, user_id):
        raise BuildNotAuthorized(build_id=build.id)
    return build


def build_exists(build_id) -> bool:
    try:
        return PcBuild.objects.filter(id=int(build_id)).exists()
    except (TypeError, ValueError):
        return False

"""Derive a price for a PC build from its components.

The build total is the sum of current product price times component
quantity. Components whose product no longer resolves are skipped rather
than failing the whole quote, so a build with a deleted part still prices
(lower) instead of erroring.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from catalog.selectors import first_image
from common.money import ZERO, line_total
from django.conf import settings

from .models import PcBuild, PcBuildComponent

DEFAULT_PLACEHOLDER_IMAGE = "https://via.placeholder.com/150?text=No+Image"


def placeholder_image() -> str:
    return getattr(settings, "BUILD_PLACEHOLDER_IMAGE", DEFAULT_PLACEHOLDER_IMAGE)


@dataclass(frozen=True)
class QuotedComponent:
    """One resolved component with the product values used for pricing."""

    component_id: int
    product_id: int
    category: str
    name: str
    image: str
    unit_price: Decimal
    quantity: int
    count_in_stock: int

    @property
    def line_total(self) -> Decimal:
        return line_total(self.unit_price, self.quantity)


@dataclass(frozen=True)
class BuildQuote:
    build_id: int
    owner_id: int
    name: str
    total_price: Decimal
    image: str
    lines: Tuple[QuotedComponent, ...]
    unresolved: Tuple[int, ...]

    @property
    def is_empty(self) -> bool:
        return not self.lines


def _quote_component(component: PcBuildComponent) -> Optional[QuotedComponent]:
    product = component.product
    if product is None:
        return None
    return QuotedComponent(
        component_id=component.id,
        product_id=product.id,
        category=component.category,
        name=product.name,
        image=first_image(product) or placeholder_image(),
        unit_price=product.price,
        quantity=int(component.quantity),
        count_in_stock=int(product.count_in_stock),
    )


def price_build(build: PcBuild) -> BuildQuote:
    """Return the priced quote for `build`.

    Components are visited in id order so the total and the representative
    image are stable across calls for an unchanged build.
    """

    lines = []
    unresolved = []
    image = None
    for component in sorted(build.components.all(), key=lambda c: c.id):
        quoted = _quote_component(component)
        if quoted is None:
            unresolved.append(component.id)
            continue
        if image is None:
            image = quoted.image
        lines.append(quoted)

    total = ZERO
    for quoted in lines:
        total += quoted.line_total

    return BuildQuote(
        build_id=build.id,
        owner_id=build.user_id,
        name=build.name,
        total_price=total,
        image=image or placeholder_image(),
        lines=tuple(lines),
        unresolved=tuple(unresolved),
    )

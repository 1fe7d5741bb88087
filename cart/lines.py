"""Identity of a cart line.

Two lines are the same purchase when they point at the same product (or
the same PC build) in the same size and color. Such lines are merged by
summing quantities, never stored twice.
"""

from dataclasses import dataclass
from typing import Optional

LINE_CATALOG = "catalog"
LINE_BUILD = "build"


def _attr(value: Optional[str]) -> str:
    return (value or "").strip()


@dataclass(frozen=True)
class LineKey:
    kind: str
    ref_id: int
    size: str = ""
    color: str = ""

    @classmethod
    def catalog(cls, product_id: int, size: Optional[str] = None, color: Optional[str] = None) -> "LineKey":
        return cls(LINE_CATALOG, int(product_id), _attr(size), _attr(color))

    @classmethod
    def build(cls, build_id: int, size: Optional[str] = None, color: Optional[str] = None) -> "LineKey":
        return cls(LINE_BUILD, int(build_id), _attr(size), _attr(color))

    @property
    def is_build(self) -> bool:
        return self.kind == LINE_BUILD

    def lookup(self) -> dict:
        """Queryset filter matching this key on `CartItem`."""

        ref_field = "build_id" if self.is_build else "product_id"
        return {ref_field: self.ref_id, "size": self.size, "color": self.color}

    as_dict = lookup

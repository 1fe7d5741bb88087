"""Line snapshots shared by checkout sessions and orders.

A snapshot line is stored as a plain JSON object with the price as a string
so it survives storage without float rounding. Once written into a checkout
it is copied verbatim into the order and never re-priced.
"""

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from common.money import line_total


@dataclass(frozen=True)
class LineSnapshot:
    name: str
    unit_price: Decimal
    quantity: int
    image: str = ""
    product_id: Optional[int] = None
    build_id: Optional[int] = None
    size: str = ""
    color: str = ""
    is_build: bool = False

    @property
    def line_total(self) -> Decimal:
        return line_total(self.unit_price, self.quantity)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["unit_price"] = str(self.unit_price)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "LineSnapshot":
        return cls(
            name=data["name"],
            unit_price=Decimal(str(data["unit_price"])),
            quantity=int(data["quantity"]),
            image=data.get("image") or "",
            product_id=data.get("product_id"),
            build_id=data.get("build_id"),
            size=data.get("size") or "",
            color=data.get("color") or "",
            is_build=bool(data.get("is_build", False)),
        )


def to_document(lines: Iterable[LineSnapshot]) -> list:
    return [line.to_dict() for line in lines]


def from_document(document: Iterable[dict]) -> Tuple[LineSnapshot, ...]:
    return tuple(LineSnapshot.from_dict(item) for item in document or ())

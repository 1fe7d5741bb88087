"""Read-only catalog lookups used by the cart and checkout services."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from common.exceptions import ProductNotFound

from .models import Product


@dataclass(frozen=True)
class ProductSnapshot:
    """Product values as they were when looked up."""

    id: int
    name: str
    price: Decimal
    images: Tuple[str, ...]
    count_in_stock: int

    @property
    def image(self) -> str:
        return self.images[0] if self.images else ""


def first_image(product: Product) -> str:
    """Return the URL of the product's first image, or an empty string."""

    for image in product.images.all():
        return image.url
    return ""


def snapshot_product(product: Product) -> ProductSnapshot:
    return ProductSnapshot(
        id=product.id,
        name=product.name,
        price=product.price,
        images=tuple(image.url for image in product.images.all()),
        count_in_stock=int(product.count_in_stock),
    )


def get_product(product_id) -> ProductSnapshot:
    """Return the current price and details of a product.

    Raises `ProductNotFound` for unknown or malformed ids.
    """

    try:
        product = Product.objects.prefetch_related("images").get(id=int(product_id))
    except (Product.DoesNotExist, TypeError, ValueError):
        raise ProductNotFound(product_id=None if product_id is None else str(product_id))
    return snapshot_product(product)


def product_exists(product_id) -> bool:
    try:
        return Product.objects.filter(id=int(product_id)).exists()
    except (TypeError, ValueError):
        return False

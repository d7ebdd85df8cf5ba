"""Product lookup used by carts, orders and notifications."""

from dataclasses import dataclass

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product


@dataclass(frozen=True)
class ProductInfo:
    product_id: str
    display_name: str | None
    exists: bool


def find_product(product_id) -> ProductInfo:
    try:
        product = current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        return ProductInfo(product_id=str(product_id), display_name=None, exists=False)

    return ProductInfo(product_id=str(product.id), display_name=product.product_name, exists=True)


def require_product(product_id) -> ProductInfo:
    """Like :func:`find_product`, but a missing product is a NotFound failure."""
    info = find_product(product_id)
    if not info.exists:
        raise ObjectNotFoundError({"product_id": [f"Product {product_id} not found"]})
    return info

"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A seller listed a new product."""

    __version__ = 1

    product_id = Identifier(required=True)
    product_name = String(required=True)
    price = Float(required=True)
    created_by = Identifier(required=True)
    added_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductRenamed:
    """The product's display name changed.

    Orders keep the name they were placed with in their confirmation, while
    later notifications (cancellation) pick up the new one.
    """

    __version__ = 1

    product_id = Identifier(required=True)
    previous_name = String(required=True)
    new_name = String(required=True)
    renamed_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """Description, price or category of a product changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    updated_at = DateTime(required=True)

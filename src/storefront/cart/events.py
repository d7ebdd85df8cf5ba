"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or its existing line was topped up."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartQuantityUpdated:
    """The quantity of a cart line was set to a new value."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    """A line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)

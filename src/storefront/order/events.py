"""Domain events for the Order aggregate.

Handlers react to these after the unit of work commits:
- OrderPlaced / OrderCancelled drive the confirmation and cancellation emails
- OrderStatusChanged drives the real-time push to the owner's subscribers
"""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A user placed an order for a product.

    ``product_name`` is the display name at placement time, kept as a
    snapshot for the confirmation email.
    """

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    product_name = String(required=True)
    quantity = Integer(required=True)
    address = String(required=True)
    contact_email = String()
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """The owner cancelled an order that had not started processing."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    contact_email = String()
    cancelled_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """The order moved forward in its fulfilment lifecycle."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    previous_status = String(required=True)
    status = String(required=True)
    changed_at = DateTime(required=True)

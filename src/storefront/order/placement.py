"""Order placement: command and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.lookup import require_product
from storefront.domain import storefront
from storefront.order.order import Order


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    user_email = String(max_length=254)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    address = String(required=True, max_length=500)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        product = require_product(command.product_id)

        order = Order.place(
            user_id=command.user_id,
            product_id=command.product_id,
            product_name=product.display_name,
            quantity=command.quantity,
            address=command.address,
            contact_email=command.user_email,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)

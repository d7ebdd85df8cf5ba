"""Cart item management: commands and handler.

Every operation is addressed by user, not by cart: each user has at most
one cart, created lazily on the first add.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.catalogue.lookup import require_product
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class AddCartItem:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


def _cart_for(repo, user_id):
    cart = repo.find_for_user(user_id)
    if cart is None:
        raise ObjectNotFoundError({"user_id": ["Cart not found"]})
    return cart


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddCartItem)
    def add_cart_item(self, command):
        require_product(command.product_id)

        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_user(command.user_id)
        if cart is None:
            cart = Cart.create(user_id=command.user_id)

        cart.add_item(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _cart_for(repo, command.user_id)
        cart.update_item_quantity(item_id=command.item_id, quantity=command.quantity)
        repo.add(cart)
        return str(cart.id)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = _cart_for(repo, command.user_id)
        if cart.remove_item(item_id=command.item_id):
            repo.add(cart)
        return str(cart.id)

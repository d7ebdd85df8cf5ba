"""Shopping Cart aggregate: one cart per user, one line per product.

The cart is a merge target for item operations: adding a product that is
already in the cart increases that line's quantity instead of adding a
second line.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.cart.events import CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.domain import storefront


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def product_lines_must_be_unique(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product may appear only once in a cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def find_item(self, item_id):
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def find_line_for_product(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def add_item(self, product_id, quantity):
        """Add ``quantity`` of a product, merging into its existing line if present."""
        _assert_positive(quantity)

        now = datetime.now(UTC)
        existing = self.find_line_for_product(product_id)

        if existing:
            existing.quantity += quantity
            line = existing
        else:
            line = CartItem(product_id=product_id, quantity=quantity, added_at=now)
            self.add_items(line)

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(line.id),
                product_id=str(product_id),
                quantity_added=quantity,
                line_quantity=line.quantity,
            )
        )
        return line

    def update_item_quantity(self, item_id, quantity):
        """Set the quantity of an existing line."""
        item = self.find_item(item_id)
        if item is None:
            raise ObjectNotFoundError({"item_id": ["Item not found in cart"]})
        _assert_positive(quantity)

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, item_id):
        """Remove the line with id ``item_id``.

        Removing an item that is not in the cart is a no-op. Returns whether
        a line was removed.
        """
        item = self.find_item(item_id)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item_id),
                product_id=str(item.product_id),
            )
        )
        return True

    def merge_from(self, other):
        """Fold every line of another cart belonging to the same user into this one."""
        if str(other.user_id) != str(self.user_id):
            raise ValidationError({"user_id": ["Only carts of the same user can be merged"]})

        for item in sorted(other.items, key=lambda line: line.added_at):
            self.add_item(product_id=item.product_id, quantity=item.quantity)


def _assert_positive(quantity):
    if quantity is None or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be at least 1"]})

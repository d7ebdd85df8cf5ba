"""Repository for the Cart aggregate."""

import structlog

from storefront.cart.cart import Cart
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.repository(part_of=Cart)
class CartRepository:
    def find_for_user(self, user_id) -> Cart | None:
        """Return the user's cart, or None if they have not added anything yet.

        Storage does not enforce one cart per user. Two first adds racing each
        other can each create a cart, so any extra carts found here are merged
        into the oldest one and deleted.
        """
        carts = self._dao.query.filter(user_id=str(user_id)).all().items
        if not carts:
            return None

        cart, *duplicates = sorted(carts, key=lambda cart: cart.created_at)
        if duplicates:
            for duplicate in duplicates:
                cart.merge_from(duplicate)
            self.add(cart)
            for duplicate in duplicates:
                self._dao.delete(duplicate)
            logger.warning(
                "Merged duplicate carts",
                user_id=str(user_id),
                cart_id=str(cart.id),
                merged=[str(duplicate.id) for duplicate in duplicates],
            )
        return cart

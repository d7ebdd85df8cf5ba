"""Product aggregate: the catalogue entries that carts and orders refer to."""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Identifier, String, Text

from storefront.catalogue.events import (
    ProductAdded,
    ProductDetailsUpdated,
    ProductRenamed,
)
from storefront.domain import storefront
from storefront.errors import PermissionDeniedError


@storefront.aggregate
class Product:
    product_name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.01)
    category = String(max_length=100)
    created_by = Identifier(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def add(cls, product_name, price, created_by, description=None, category=None):
        now = datetime.now(UTC)
        product = cls(
            product_name=product_name,
            description=description,
            price=price,
            category=category,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                product_name=product_name,
                price=price,
                created_by=str(created_by),
                added_at=now,
            )
        )
        return product

    def assert_owned_by(self, user_id):
        if str(self.created_by) != str(user_id):
            raise PermissionDeniedError({"product_id": ["Only the seller who listed a product may change or delete it"]})

    def update_details(self, product_name=None, description=None, price=None, category=None):
        """Apply the provided changes; ``None`` keeps the current value."""
        now = datetime.now(UTC)

        if product_name and product_name != self.product_name:
            previous_name = self.product_name
            self.product_name = product_name
            self.raise_(
                ProductRenamed(
                    product_id=str(self.id),
                    previous_name=previous_name,
                    new_name=product_name,
                    renamed_at=now,
                )
            )

        details_changed = False
        for field_name, value in (("description", description), ("price", price), ("category", category)):
            if value is not None and value != getattr(self, field_name):
                setattr(self, field_name, value)
                details_changed = True

        if details_changed:
            self.raise_(ProductDetailsUpdated(product_id=str(self.id), updated_at=now))

        self.updated_at = now

"""Product listing management: commands and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class AddProduct:
    product_name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.01)
    category = String(max_length=100)
    created_by = Identifier(required=True)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    requested_by = Identifier(required=True)
    product_name = String(max_length=255)
    description = Text()
    price = Float(min_value=0.01)
    category = String(max_length=100)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)
    requested_by = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            product_name=command.product_name,
            description=command.description,
            price=command.price,
            category=command.category,
            created_by=command.created_by,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.assert_owned_by(command.requested_by)
        product.update_details(
            product_name=command.product_name,
            description=command.description,
            price=command.price,
            category=command.category,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.assert_owned_by(command.requested_by)
        repo._dao.delete(product)
        logger.info("Product deleted", product_id=str(product.id), deleted_by=str(command.requested_by))

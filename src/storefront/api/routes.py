"""FastAPI routes for orders, carts and products."""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.principal import Principal, get_principal, require_seller
from storefront.api.schemas import (
    AddCartItemRequest,
    AddProductRequest,
    CancelOrderRequest,
    CartItemSchema,
    CartResponse,
    MessageResponse,
    OrderResponse,
    OrderStatusResponse,
    PlaceOrderRequest,
    ProductIdResponse,
    ProductResponse,
    StatusChangeSchema,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from storefront.cart.cart import Cart
from storefront.cart.items import AddCartItem, RemoveCartItem, UpdateCartItem
from storefront.catalogue.management import AddProduct, DeleteProduct, UpdateProduct
from storefront.catalogue.product import Product
from storefront.order.cancellation import CancelOrder
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder
from storefront.order.status import UpdateOrderStatus
from storefront.utils.retry import process_with_retry

order_router = APIRouter(prefix="/orders", tags=["orders"])
cart_router = APIRouter(prefix="/cart", tags=["cart"])
product_router = APIRouter(prefix="/products", tags=["products"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------
def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        user_id=str(order.user_id),
        product_id=str(order.product_id),
        quantity=order.quantity,
        address=order.address,
        status=order.status,
        status_history=[
            StatusChangeSchema(status=change.status, timestamp=change.recorded_at) for change in order.history
        ],
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        cart_id=str(cart.id),
        user_id=str(cart.user_id),
        items=[
            CartItemSchema(item_id=str(item.id), product_id=str(item.product_id), quantity=item.quantity)
            for item in sorted(cart.items, key=lambda item: item.added_at)
        ],
    )


def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        product_name=product.product_name,
        price=product.price,
        description=product.description,
        category=product.category,
        created_by=str(product.created_by),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderStatusResponse)
async def place_order(
    body: PlaceOrderRequest,
    principal: Principal = Depends(get_principal),
) -> OrderStatusResponse:
    """Place an order for a single product."""
    command = PlaceOrder(
        user_id=principal.user_id,
        user_email=principal.email,
        product_id=body.product_id,
        quantity=body.quantity,
        address=body.address,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderStatusResponse(order_id=order_id, status=order.status)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(principal: Principal = Depends(get_principal)) -> list[OrderResponse]:
    """List every order, oldest first."""
    orders = current_domain.repository_for(Order)._dao.query.limit(None).all().items
    return [_order_response(order) for order in sorted(orders, key=lambda order: order.created_at)]


@order_router.put("/cancel", response_model=OrderStatusResponse)
async def cancel_order(
    body: CancelOrderRequest,
    principal: Principal = Depends(get_principal),
) -> OrderStatusResponse:
    """Cancel one of the caller's own orders."""
    command = CancelOrder(order_id=body.order_id, user_id=principal.user_id)
    status = process_with_retry(command)
    return OrderStatusResponse(order_id=body.order_id, status=status)


@order_router.put("/status", response_model=OrderStatusResponse)
async def update_order_status(
    body: UpdateOrderStatusRequest,
    principal: Principal = Depends(get_principal),
) -> OrderStatusResponse:
    """Set an order's fulfilment status."""
    command = UpdateOrderStatus(order_id=body.order_id, status=body.status)
    status = process_with_retry(command)
    return OrderStatusResponse(order_id=body.order_id, status=status)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, principal: Principal = Depends(get_principal)) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    return _order_response(order)


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("/user/{user_id}", response_model=CartResponse)
async def get_cart(user_id: str, principal: Principal = Depends(get_principal)) -> CartResponse:
    cart = current_domain.repository_for(Cart).find_for_user(user_id)
    if cart is None:
        raise ObjectNotFoundError({"user_id": ["Cart not found"]})
    return _cart_response(cart)


@cart_router.post("", status_code=201, response_model=CartResponse)
async def add_cart_item(
    body: AddCartItemRequest,
    principal: Principal = Depends(get_principal),
) -> CartResponse:
    """Add a product to the caller's cart, creating the cart on first use."""
    command = AddCartItem(
        user_id=principal.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    cart_id = process_with_retry(command)
    return _cart_response(current_domain.repository_for(Cart).get(cart_id))


@cart_router.put("/item/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: str,
    body: UpdateCartItemRequest,
    principal: Principal = Depends(get_principal),
) -> CartResponse:
    command = UpdateCartItem(user_id=principal.user_id, item_id=item_id, quantity=body.quantity)
    cart_id = process_with_retry(command)
    return _cart_response(current_domain.repository_for(Cart).get(cart_id))


@cart_router.delete("/item/{item_id}", response_model=MessageResponse)
async def remove_cart_item(
    item_id: str,
    principal: Principal = Depends(get_principal),
) -> MessageResponse:
    process_with_retry(RemoveCartItem(user_id=principal.user_id, item_id=item_id))
    return MessageResponse(message="Item removed from cart")


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def add_product(
    body: AddProductRequest,
    principal: Principal = Depends(require_seller),
) -> ProductIdResponse:
    """List a new product. Sellers and admins only."""
    command = AddProduct(
        product_name=body.product_name,
        description=body.description,
        price=body.price,
        category=body.category,
        created_by=principal.user_id,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=product_id)


@product_router.get("", response_model=list[ProductResponse])
async def list_products() -> list[ProductResponse]:
    products = current_domain.repository_for(Product)._dao.query.limit(None).all().items
    return [_product_response(product) for product in sorted(products, key=lambda p: p.created_at)]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return _product_response(product)


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    principal: Principal = Depends(require_seller),
) -> ProductResponse:
    """Change a product's details. Only the seller who listed it may do so."""
    command = UpdateProduct(
        product_id=product_id,
        requested_by=principal.user_id,
        product_name=body.product_name,
        description=body.description,
        price=body.price,
        category=body.category,
    )
    process_with_retry(command)
    return _product_response(current_domain.repository_for(Product).get(product_id))


@product_router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    principal: Principal = Depends(require_seller),
) -> MessageResponse:
    """Remove a product. Only the seller who listed it may do so."""
    current_domain.process(DeleteProduct(product_id=product_id, requested_by=principal.user_id), asynchronous=False)
    return MessageResponse(message="Product deleted")

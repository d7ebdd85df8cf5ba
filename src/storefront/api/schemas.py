"""Pydantic request/response schemas for the storefront API."""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)
    address: str = Field(min_length=1, max_length=500)


class CancelOrderRequest(BaseModel):
    order_id: str


class UpdateOrderStatusRequest(BaseModel):
    order_id: str
    status: str


class OrderStatusResponse(BaseModel):
    order_id: str
    status: str


class StatusChangeSchema(BaseModel):
    status: str
    timestamp: datetime


class OrderResponse(BaseModel):
    order_id: str
    user_id: str
    product_id: str
    quantity: int
    address: str
    status: str
    status_history: list[StatusChangeSchema] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddCartItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(ge=1)


class CartItemSchema(BaseModel):
    item_id: str
    product_id: str
    quantity: int


class CartResponse(BaseModel):
    cart_id: str
    user_id: str
    items: list[CartItemSchema] = []


class MessageResponse(BaseModel):
    message: str


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    product_name: str = Field(min_length=1, max_length=255)
    price: float = Field(gt=0)
    description: str | None = None
    category: str | None = None


class UpdateProductRequest(BaseModel):
    product_name: str | None = Field(default=None, min_length=1, max_length=255)
    price: float | None = Field(default=None, gt=0)
    description: str | None = None
    category: str | None = None


class ProductIdResponse(BaseModel):
    product_id: str


class ProductResponse(BaseModel):
    product_id: str
    product_name: str
    price: float
    description: str | None = None
    category: str | None = None
    created_by: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

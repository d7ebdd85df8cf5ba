"""Storefront HTTP and WebSocket API package."""

from storefront.api.realtime import realtime_router
from storefront.api.routes import cart_router, order_router, product_router

__all__ = ["order_router", "cart_router", "product_router", "realtime_router"]

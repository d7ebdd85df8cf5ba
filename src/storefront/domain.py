"""Storefront bounded context: products, shopping carts and orders.

Handles the order status lifecycle, per-user cart reconciliation, and the
notifications (email and real-time) that follow order state changes.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)

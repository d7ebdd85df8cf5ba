"""Order aggregate: one product, one shipping address, one status lifecycle.

State Machine (5 states):
    PLACED → UNDER_PACKAGING | DISPATCH | DELIVERED | CANCELLED
    UNDER_PACKAGING, DISPATCH → UNDER_PACKAGING | DISPATCH | DELIVERED
    DELIVERED and CANCELLED are terminal
    CANCELLED is only reached through cancel(), by the owner

Every transition, including the initial placement, appends a StatusChange
to ``status_history``. History is append-only and ordered by ``sequence``;
``status`` always equals the status of the latest entry.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.errors import PermissionDeniedError
from storefront.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PLACED = "Placed"
    UNDER_PACKAGING = "UnderPackaging"
    DISPATCH = "Dispatch"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.PLACED: {
        OrderStatus.UNDER_PACKAGING,
        OrderStatus.DISPATCH,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.UNDER_PACKAGING: {OrderStatus.UNDER_PACKAGING, OrderStatus.DISPATCH, OrderStatus.DELIVERED},
    OrderStatus.DISPATCH: {OrderStatus.UNDER_PACKAGING, OrderStatus.DISPATCH, OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Statuses reachable through update_status(); cancellation has its own path
UPDATABLE_STATUSES = frozenset(
    {
        OrderStatus.UNDER_PACKAGING,
        OrderStatus.DISPATCH,
        OrderStatus.DELIVERED,
    }
)


@storefront.entity(part_of="Order")
class StatusChange:
    """One entry in an order's status history."""

    status = String(required=True, choices=OrderStatus)
    sequence = Integer(required=True, min_value=1)
    recorded_at = DateTime(required=True)


@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    address = String(required=True, max_length=500)
    contact_email = String(max_length=254)
    status = String(choices=OrderStatus, default=OrderStatus.PLACED.value)
    status_history = HasMany(StatusChange)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def status_must_match_latest_history_entry(self):
        if self.status_history and self.latest_status_change.status != self.status:
            raise ValidationError({"status": ["Order status must match the latest status history entry"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, product_id, product_name, quantity, address, contact_email=None):
        """Create an order in PLACED state.

        Args:
            product_name: Display name of the product right now. It travels on
                the OrderPlaced event only; the order does not keep it.
        """
        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
            address=address,
            contact_email=contact_email,
            status=OrderStatus.PLACED.value,
            created_at=now,
            updated_at=now,
        )
        order._record_status(OrderStatus.PLACED, now)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                product_id=str(product_id),
                product_name=product_name,
                quantity=quantity,
                address=address,
                contact_email=contact_email,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------
    @property
    def history(self):
        """Status history in the order the transitions happened."""
        return sorted(self.status_history, key=lambda change: change.sequence)

    @property
    def latest_status_change(self):
        history = self.history
        return history[-1] if history else None

    def _record_status(self, target_status, at):
        with atomic_change(self):
            self.status = target_status.value
            self.add_status_history(
                StatusChange(
                    status=target_status.value,
                    sequence=len(self.status_history) + 1,
                    recorded_at=at,
                )
            )
            self.updated_at = at

    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def update_status(self, new_status):
        """Move the order to UNDER_PACKAGING, DISPATCH or DELIVERED."""
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        if target not in UPDATABLE_STATUSES:
            allowed = ", ".join(sorted(status.value for status in UPDATABLE_STATUSES))
            raise ValidationError({"status": [f"Status must be one of {allowed}; got {target.value}"]})

        self._assert_can_transition(target)

        previous_status = self.status
        now = datetime.now(UTC)
        self._record_status(target, now)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                user_id=str(self.user_id),
                previous_status=previous_status,
                status=target.value,
                changed_at=now,
            )
        )

    def cancel(self, requested_by):
        """Cancel the order on behalf of its owner. Only PLACED orders can be cancelled."""
        if str(requested_by) != str(self.user_id):
            raise PermissionDeniedError({"order_id": ["Only the user who placed an order may cancel it"]})

        self._assert_can_transition(OrderStatus.CANCELLED)

        now = datetime.now(UTC)
        self._record_status(OrderStatus.CANCELLED, now)

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(self.product_id),
                contact_email=self.contact_email,
                cancelled_at=now,
            )
        )

"""Application tests for CancelOrder and the cancellation email."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalogue.management import DeleteProduct, UpdateProduct
from storefront.errors import PermissionDeniedError
from storefront.order.cancellation import CancelOrder
from storefront.order.order import Order, OrderStatus
from storefront.order.placement import PlaceOrder
from storefront.order.status import UpdateOrderStatus


def _place(product_id, user_id="user-001"):
    return current_domain.process(
        PlaceOrder(
            user_id=user_id,
            user_email=f"{user_id}@example.com",
            product_id=product_id,
            quantity=1,
            address="1 Main St",
        ),
        asynchronous=False,
    )


def _cancel(order_id, user_id="user-001"):
    return current_domain.process(CancelOrder(order_id=order_id, user_id=user_id), asynchronous=False)


class TestCancelOrderCommand:
    def test_owner_can_cancel(self, widget_id):
        order_id = _place(widget_id)
        status = _cancel(order_id)
        assert status == OrderStatus.CANCELLED.value

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.CANCELLED.value
        assert [change.status for change in order.history] == ["Placed", "Cancelled"]

    def test_non_owner_is_denied_and_order_unchanged(self, widget_id):
        order_id = _place(widget_id)
        with pytest.raises(PermissionDeniedError):
            _cancel(order_id, user_id="user-002")

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PLACED.value
        assert len(order.status_history) == 1

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            _cancel("no-such-order")

    def test_cannot_cancel_after_dispatch(self, widget_id):
        order_id = _place(widget_id)
        current_domain.process(UpdateOrderStatus(order_id=order_id, status="Dispatch"), asynchronous=False)
        with pytest.raises(ValidationError):
            _cancel(order_id)
        assert current_domain.repository_for(Order).get(order_id).status == "Dispatch"

    def test_cannot_cancel_twice(self, widget_id):
        order_id = _place(widget_id)
        _cancel(order_id)
        with pytest.raises(ValidationError):
            _cancel(order_id)


class TestCancellationEmail:
    def test_cancellation_email_sent(self, widget_id, email_channel):
        order_id = _place(widget_id)
        _cancel(order_id)

        subjects = [email["subject"] for email in email_channel.sent_emails]
        assert subjects == ["Order Confirmation", "Order Cancellation"]
        assert email_channel.sent_emails[1]["to"] == "user-001@example.com"

    def test_denied_cancellation_sends_nothing(self, widget_id, email_channel):
        order_id = _place(widget_id)
        with pytest.raises(PermissionDeniedError):
            _cancel(order_id, user_id="user-002")
        assert [email["subject"] for email in email_channel.sent_emails] == ["Order Confirmation"]

    def test_cancellation_uses_current_product_name(self, widget_id, email_channel):
        order_id = _place(widget_id)
        current_domain.process(
            UpdateProduct(product_id=widget_id, requested_by="seller-1", product_name="Gizmo"),
            asynchronous=False,
        )
        _cancel(order_id)

        confirmation, cancellation = email_channel.sent_emails
        assert confirmation["body"].startswith("Your order for Widget has been placed.")
        assert cancellation["body"].startswith("Your order for Gizmo has been cancelled.")

    def test_cancellation_after_product_deleted(self, widget_id, email_channel):
        order_id = _place(widget_id)
        current_domain.process(DeleteProduct(product_id=widget_id, requested_by="seller-1"), asynchronous=False)

        assert _cancel(order_id) == OrderStatus.CANCELLED.value
        cancellation = email_channel.sent_emails[-1]
        assert cancellation["body"].startswith(f"Your order for product {widget_id} has been cancelled.")

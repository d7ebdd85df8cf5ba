"""Tests for the real-time channel registry and the order status fan-out."""

import pytest
from storefront.notifications.realtime.fake_subscriber import FakeSubscriber
from storefront.notifications.realtime.fanout import (
    ORDER_STATUS_EVENT,
    StatusFanout,
    attach_fanout,
    attached_fanout,
    detach_fanout,
)
from storefront.notifications.realtime.registry import ChannelRegistry, RegistryClosedError


class TestChannelRegistry:
    def test_emit_reaches_every_member(self):
        registry = ChannelRegistry()
        first, second = FakeSubscriber(), FakeSubscriber()
        registry.join_group("user-001", first)
        registry.join_group("user-001", second)

        delivered = registry.emit("user-001", "ping", {"n": 1})

        assert delivered == 2
        assert first.received == [{"event": "ping", "data": {"n": 1}}]
        assert second.received == [{"event": "ping", "data": {"n": 1}}]

    def test_emit_to_empty_group_is_dropped(self):
        registry = ChannelRegistry()
        assert registry.emit("nobody", "ping", {}) == 0

    def test_groups_are_isolated(self):
        registry = ChannelRegistry()
        mine, theirs = FakeSubscriber(), FakeSubscriber()
        registry.join_group("user-001", mine)
        registry.join_group("user-002", theirs)

        registry.emit("user-001", "ping", {})

        assert len(mine.received) == 1
        assert theirs.received == []

    def test_joining_twice_delivers_once(self):
        registry = ChannelRegistry()
        subscriber = FakeSubscriber()
        registry.join_group("user-001", subscriber)
        registry.join_group("user-001", subscriber)
        assert registry.emit("user-001", "ping", {}) == 1

    def test_leave_group(self):
        registry = ChannelRegistry()
        subscriber = FakeSubscriber()
        registry.join_group("user-001", subscriber)
        registry.leave_group("user-001", subscriber)
        assert registry.members("user-001") == []
        assert registry.group_count() == 0

    def test_leave_all(self):
        registry = ChannelRegistry()
        subscriber = FakeSubscriber()
        registry.join_group("user-001", subscriber)
        registry.join_group("user-002", subscriber)
        registry.leave_all(subscriber)
        assert registry.group_count() == 0

    def test_failing_subscriber_is_skipped_and_dropped(self):
        registry = ChannelRegistry()
        healthy, broken = FakeSubscriber(), FakeSubscriber()
        broken.disconnect()
        registry.join_group("user-001", healthy)
        registry.join_group("user-001", broken)

        delivered = registry.emit("user-001", "ping", {})

        assert delivered == 1
        assert len(healthy.received) == 1
        assert registry.members("user-001") == [healthy]

    def test_close_drops_everyone_and_refuses_new_members(self):
        registry = ChannelRegistry()
        subscriber = FakeSubscriber()
        registry.join_group("user-001", subscriber)

        registry.close()

        assert registry.closed
        assert registry.emit("user-001", "ping", {}) == 0
        with pytest.raises(RegistryClosedError):
            registry.join_group("user-001", FakeSubscriber())


class TestStatusFanout:
    def test_subscription_is_per_user_not_per_order(self):
        fanout = StatusFanout(ChannelRegistry())
        subscriber = FakeSubscriber()
        fanout.subscribe(order_id="order-A", user_id="user-001", subscriber=subscriber)

        fanout.publish_status(user_id="user-001", order_id="order-B", status="Dispatch")

        assert subscriber.received == [
            {"event": ORDER_STATUS_EVENT, "data": {"orderId": "order-B", "status": "Dispatch"}}
        ]

    def test_other_users_subscribers_are_not_notified(self):
        fanout = StatusFanout(ChannelRegistry())
        subscriber = FakeSubscriber()
        fanout.subscribe(order_id="order-A", user_id="user-002", subscriber=subscriber)

        delivered = fanout.publish_status(user_id="user-001", order_id="order-A", status="Dispatch")

        assert delivered == 0
        assert subscriber.received == []

    def test_events_arrive_in_publish_order(self):
        fanout = StatusFanout(ChannelRegistry())
        subscriber = FakeSubscriber()
        fanout.subscribe(order_id="order-A", user_id="user-001", subscriber=subscriber)

        for status in ["UnderPackaging", "Dispatch", "Delivered"]:
            fanout.publish_status(user_id="user-001", order_id="order-A", status=status)

        assert [m["data"]["status"] for m in subscriber.received] == ["UnderPackaging", "Dispatch", "Delivered"]

    def test_unsubscribe(self):
        fanout = StatusFanout(ChannelRegistry())
        subscriber = FakeSubscriber()
        fanout.subscribe(order_id="order-A", user_id="user-001", subscriber=subscriber)
        fanout.unsubscribe(subscriber)

        fanout.publish_status(user_id="user-001", order_id="order-A", status="Dispatch")

        assert subscriber.received == []

    def test_attach_and_detach(self):
        fanout = StatusFanout(ChannelRegistry())
        attach_fanout(fanout)
        try:
            assert attached_fanout() is fanout
        finally:
            assert detach_fanout() is fanout
        assert attached_fanout() is None

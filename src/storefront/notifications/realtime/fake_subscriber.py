"""Fake subscriber: records delivered events in memory."""

from storefront.notifications.realtime.subscriber_port import SubscriberPort


class FakeSubscriber(SubscriberPort):
    def __init__(self):
        self.received: list[dict] = []
        self.connected = True

    def disconnect(self):
        self.connected = False

    def deliver(self, event_name: str, payload: dict) -> None:
        if not self.connected:
            raise ConnectionError("Subscriber is disconnected")
        self.received.append({"event": event_name, "data": payload})

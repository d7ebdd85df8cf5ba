"""Real-time subscriber port: abstract interface for one connected client."""

from abc import ABC, abstractmethod


class SubscriberPort(ABC):
    @abstractmethod
    def deliver(self, event_name: str, payload: dict) -> None:
        """Hand one event to the client without blocking.

        Raises if the client can no longer receive events; the registry then
        drops the subscriber.
        """
        ...

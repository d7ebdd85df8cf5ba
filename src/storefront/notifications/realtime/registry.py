"""Channel registry: named groups of connected real-time subscribers.

Delivery is best effort and at most once: events are handed to whoever is
in the group at emit time, nothing is stored for clients that connect later,
and a subscriber that fails to accept an event is dropped from every group.
"""

import threading

import structlog

from storefront.notifications.realtime.subscriber_port import SubscriberPort

logger = structlog.get_logger(__name__)


class RegistryClosedError(RuntimeError):
    pass


class ChannelRegistry:
    def __init__(self):
        self._groups: dict[str, set[SubscriberPort]] = {}
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def join_group(self, group: str, subscriber: SubscriberPort) -> None:
        with self._lock:
            if self._closed:
                raise RegistryClosedError("Channel registry is closed")
            self._groups.setdefault(str(group), set()).add(subscriber)

    def leave_group(self, group: str, subscriber: SubscriberPort) -> None:
        with self._lock:
            self._discard(str(group), subscriber)

    def leave_all(self, subscriber: SubscriberPort) -> None:
        with self._lock:
            for group in list(self._groups):
                self._discard(group, subscriber)

    def _discard(self, group: str, subscriber: SubscriberPort) -> None:
        members = self._groups.get(group)
        if members is None:
            return
        members.discard(subscriber)
        if not members:
            del self._groups[group]

    def members(self, group: str) -> list[SubscriberPort]:
        with self._lock:
            return list(self._groups.get(str(group), ()))

    def group_count(self) -> int:
        with self._lock:
            return len(self._groups)

    def emit(self, group: str, event_name: str, payload: dict) -> int:
        """Deliver an event to every current member of ``group``.

        Returns the number of subscribers that accepted it. Never raises on
        delivery failure.
        """
        recipients = self.members(group)
        if not recipients:
            logger.debug("No subscribers in group, event dropped", group=str(group), event_name=event_name)
            return 0

        delivered = 0
        for subscriber in recipients:
            try:
                subscriber.deliver(event_name, payload)
            except Exception as e:
                logger.warning(
                    "Real-time delivery failed, dropping subscriber",
                    group=str(group),
                    event_name=event_name,
                    error=str(e),
                )
                self.leave_all(subscriber)
            else:
                delivered += 1

        return delivered

    def close(self) -> None:
        """Drop every subscriber and refuse new ones."""
        with self._lock:
            self._closed = True
            self._groups.clear()

"""Outbound email port used by the order notification handlers.

Adapters report the outcome instead of raising: ``send`` returns a result
dict whose ``status`` is ``SENT`` or ``FAILED``. Callers still guard
against adapters that raise.
"""

from abc import ABC, abstractmethod

SENT = "sent"
FAILED = "failed"


class EmailPort(ABC):
    @abstractmethod
    def send(self, to: str, subject: str, body: str, html_body: str | None = None) -> dict:
        """Deliver one message to ``to``.

        Returns ``{"message_id", "status"}`` on success, and
        ``{"message_id": None, "status": FAILED, "error"}`` when the
        provider refused it.
        """

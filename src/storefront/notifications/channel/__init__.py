"""Email channel factory.

Provides get_email_channel() / set_email_channel() to swap implementations.
The fake adapter is the default until a real one is installed at startup.
"""

from storefront.notifications.channel.email_port import EmailPort
from storefront.notifications.channel.fake_email import FakeEmailAdapter

_current_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    """Return the active email adapter. Defaults to FakeEmailAdapter."""
    global _current_channel
    if _current_channel is None:
        _current_channel = FakeEmailAdapter()
    return _current_channel


def set_email_channel(channel: EmailPort) -> None:
    global _current_channel
    _current_channel = channel


def reset_email_channel() -> None:
    global _current_channel
    _current_channel = None

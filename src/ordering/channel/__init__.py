"""Messaging channel factory — where checkout sends finished orders.

``STOREFRONT_CHANNEL`` selects the default adapter: ``whatsapp`` (default)
or ``fake``. Tests swap adapters with ``set_channel()``.
"""

import os

from ordering.channel.port import MessagingChannel

_current_channel: MessagingChannel | None = None


def _default_channel() -> MessagingChannel:
    channel_type = os.environ.get("STOREFRONT_CHANNEL", "whatsapp").lower()
    if channel_type == "whatsapp":
        from ordering.channel.whatsapp import WhatsAppChannel

        return WhatsAppChannel()
    if channel_type == "fake":
        from ordering.channel.fake_channel import FakeMessagingChannel

        return FakeMessagingChannel()
    raise ValueError(f"Unknown channel type: {channel_type}")


def get_channel() -> MessagingChannel:
    """Return the active messaging channel (singleton)."""
    global _current_channel
    if _current_channel is None:
        _current_channel = _default_channel()
    return _current_channel


def set_channel(channel: MessagingChannel) -> None:
    """Override the active messaging channel (useful for tests)."""
    global _current_channel
    _current_channel = channel


def reset_channel() -> None:
    """Reset to the configured default channel."""
    global _current_channel
    _current_channel = None

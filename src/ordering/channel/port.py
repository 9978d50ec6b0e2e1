"""Messaging channel port — abstract interface for order hand-off."""

from abc import ABC, abstractmethod


class MessagingChannel(ABC):
    """Abstract interface for outbound order-message channels.

    The caller passes one already percent-encoded string and reads nothing
    back beyond the dispatch receipt; delivery is the channel's concern.
    """

    @abstractmethod
    def send(self, encoded_text: str) -> dict:
        """Hand off an encoded order message.

        Returns:
            dict with keys: message_id, status ("opened" or "failed"), url (optional), error (optional)
        """
        ...

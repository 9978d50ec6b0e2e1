"""WhatsApp deep-link channel — hands the order to a WhatsApp chat."""

import os
from collections.abc import Callable
from uuid import uuid4

import structlog

from ordering.channel.port import MessagingChannel

DEFAULT_SEND_URL = "https://api.whatsapp.com/send"

logger = structlog.get_logger(__name__)


class WhatsAppChannel(MessagingChannel):
    """Builds a ``send?text=`` deep link and passes it to an opener.

    Over HTTP there is no opener: the link is returned for the browser to
    open. A desktop caller can pass ``webbrowser.open``.
    """

    def __init__(self, send_url: str | None = None, opener: Callable[[str], object] | None = None):
        self.send_url = send_url or os.environ.get("WHATSAPP_SEND_URL", DEFAULT_SEND_URL)
        self.opener = opener

    def deep_link(self, encoded_text: str) -> str:
        return f"{self.send_url}?text={encoded_text}"

    def send(self, encoded_text: str) -> dict:
        url = self.deep_link(encoded_text)
        if self.opener is not None:
            self.opener(url)

        message_id = f"wa-{uuid4().hex[:12]}"
        logger.info("Order message handed to WhatsApp", message_id=message_id)
        return {"message_id": message_id, "status": "opened", "url": url}

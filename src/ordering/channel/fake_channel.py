"""Fake messaging channel — records handed-off messages for testing."""

from urllib.parse import unquote
from uuid import uuid4

from ordering.channel.port import MessagingChannel


class FakeMessagingChannel(MessagingChannel):
    """Channel that records messages in memory for test assertions."""

    def __init__(self):
        self.sent_messages: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Channel unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Channel unavailable"):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(self, encoded_text: str) -> dict:
        if not self.should_succeed:
            return {
                "message_id": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        message_id = f"msg-{uuid4().hex[:12]}"
        self.sent_messages.append(
            {
                "message_id": message_id,
                "encoded_text": encoded_text,
                "text": unquote(encoded_text),
            }
        )
        return {"message_id": message_id, "status": "opened", "url": f"fake://order?text={encoded_text}"}

    def reset(self):
        """Clear sent messages (useful between tests)."""
        self.sent_messages.clear()
        self.should_succeed = True
        self.failure_reason = "Channel unavailable"

"""Integration tests for the messaging channel adapters and factory."""

import pytest
from ordering.channel import get_channel, reset_channel, set_channel
from ordering.channel.fake_channel import FakeMessagingChannel
from ordering.channel.whatsapp import DEFAULT_SEND_URL, WhatsAppChannel


@pytest.fixture(autouse=True)
def _reset_channel():
    reset_channel()
    yield
    reset_channel()


class TestWhatsAppChannel:
    def test_deep_link(self):
        channel = WhatsAppChannel()
        assert channel.deep_link("Hello%20there") == "https://api.whatsapp.com/send?text=Hello%20there"

    def test_send_hands_link_to_opener(self):
        opened = []
        channel = WhatsAppChannel(opener=opened.append)
        receipt = channel.send("Hello%20there")

        assert opened == [f"{DEFAULT_SEND_URL}?text=Hello%20there"]
        assert receipt["status"] == "opened"
        assert receipt["url"] == opened[0]
        assert receipt["message_id"].startswith("wa-")

    def test_send_without_opener_returns_link(self):
        receipt = WhatsAppChannel().send("Hi")
        assert receipt["url"] == f"{DEFAULT_SEND_URL}?text=Hi"

    def test_send_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("WHATSAPP_SEND_URL", "https://wa.example.test/send")
        assert WhatsAppChannel().deep_link("Hi") == "https://wa.example.test/send?text=Hi"


class TestFakeMessagingChannel:
    def test_records_decoded_text(self):
        channel = FakeMessagingChannel()
        receipt = channel.send("Orderer%20Name%3A%20Ana")

        assert receipt["status"] == "opened"
        assert channel.sent_messages[0]["text"] == "Orderer Name: Ana"

    def test_configured_failure(self):
        channel = FakeMessagingChannel()
        channel.configure(should_succeed=False, failure_reason="no network")
        receipt = channel.send("Hi")

        assert receipt["status"] == "failed"
        assert receipt["error"] == "no network"
        assert channel.sent_messages == []


class TestChannelFactory:
    def test_default_is_whatsapp(self, monkeypatch):
        monkeypatch.delenv("STOREFRONT_CHANNEL", raising=False)
        assert isinstance(get_channel(), WhatsAppChannel)

    def test_fake_from_environment(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_CHANNEL", "fake")
        assert isinstance(get_channel(), FakeMessagingChannel)

    def test_unknown_channel_type(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_CHANNEL", "carrier-pigeon")
        with pytest.raises(ValueError):
            get_channel()

    def test_override(self):
        channel = FakeMessagingChannel()
        set_channel(channel)
        assert get_channel() is channel

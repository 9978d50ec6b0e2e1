"""Order composer — turns a cart snapshot into the message sent at checkout.

Checkout needs a non-empty ledger and a buyer. When either is missing the
composer produces nothing and the channel is never called. Otherwise the
message lists every line in cart order with its subtotal, then the grand
total, the buyer's name and address, and a closing request to confirm
availability and shipping.
"""

from dataclasses import dataclass
from urllib.parse import quote

import structlog

from identity.session.identity import Buyer
from ordering.cart.ledger import CartLedger, LineItem
from ordering.channel.port import MessagingChannel
from shared.money import format_price

logger = structlog.get_logger(__name__)

# Characters encodeURIComponent leaves as-is, beyond letters and digits
URI_COMPONENT_SAFE = "-_.!~*'()"

GREETING = "Hello, I would like to order the following products:"
ORDER_LIST_HEADING = "[ORDER LIST]"
SEPARATOR = "---------------------------"
CLOSING = "Please confirm availability and total shipping costs. Thank you."


@dataclass(frozen=True)
class OrderMessage:
    """The rendered order text. Built at checkout, sent once, never stored."""

    text: str

    def encoded(self) -> str:
        return quote(self.text, safe=URI_COMPONENT_SAFE)


def render_line(item: LineItem) -> str:
    return f"- {item.name} ({item.quantity}) - {format_price(item.subtotal)}"


def compose(ledger: CartLedger | None, actor) -> OrderMessage | None:
    """Render the order message, or return None when checkout is not allowed."""
    if ledger is None or ledger.is_empty():
        return None

    match actor:
        case Buyer():
            buyer = actor
        case _:
            return None

    lines = [GREETING, "", ORDER_LIST_HEADING]
    lines.extend(render_line(item) for item in ledger)
    lines.extend(
        [
            "",
            "",
            SEPARATOR,
            f"Total Product Price: {format_price(ledger.total())}",
            f"Orderer Name: {buyer.name}",
            f"Shipping Address: {buyer.address}",
            "",
            CLOSING,
        ]
    )
    return OrderMessage(text="\n".join(lines))


def checkout(ledger: CartLedger | None, actor, channel: MessagingChannel) -> dict | None:
    """Compose the order and hand it to ``channel``.

    Returns the channel's dispatch receipt, or None when checkout was refused.
    """
    message = compose(ledger, actor)
    if message is None:
        logger.debug("Checkout refused", has_items=bool(ledger), actor=type(actor).__name__)
        return None

    receipt = channel.send(message.encoded())
    logger.info(
        "Order handed off",
        line_items=ledger.size(),
        units=ledger.item_count(),
        total=ledger.total(),
        status=receipt.get("status"),
    )
    return receipt

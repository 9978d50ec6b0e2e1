"""Ordering bounded context — cart composition and order hand-off.

Accumulates line items in an immutable cart ledger, renders the finished
cart as an order message, and passes that message to an outbound messaging
channel for a human to confirm.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)

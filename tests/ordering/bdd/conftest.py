"""Shared BDD fixtures for the Ordering domain."""

import pytest
from ordering.cart.ledger import CartLedger


@pytest.fixture()
def products():
    return {}


@pytest.fixture()
def cart():
    """Mutable holder for the current ledger snapshot."""
    return {"ledger": CartLedger()}

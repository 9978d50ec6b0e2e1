"""Shared BDD fixtures for the Identity domain."""

import pytest
from identity.admin.fake_lookup import FakeCredentialLookup
from identity.session.storage import InMemorySessionStorage


@pytest.fixture()
def credentials():
    return FakeCredentialLookup()


@pytest.fixture()
def storage():
    return InMemorySessionStorage()


@pytest.fixture()
def outcome():
    """Mutable holder for the last form submission outcome."""
    return {}

"""Shared BDD fixtures for the Catalogue domain."""

import pytest


@pytest.fixture()
def listing():
    return []

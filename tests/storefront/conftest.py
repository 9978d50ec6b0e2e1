from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from catalogue.fake_store import FakeCatalogueStore
from identity.admin.fake_lookup import FakeCredentialLookup
from ordering.channel.fake_channel import FakeMessagingChannel


@pytest.fixture(autouse=True)
def _domains(catalogue_bed, identity_bed, ordering_bed, reset_domain_data):
    """The storefront spans every bounded context; clean them all after each test."""
    from catalogue.domain import catalogue
    from identity.domain import identity
    from ordering.domain import ordering

    yield

    for domain in (catalogue, identity, ordering):
        reset_domain_data(domain)


def _product(product_id, name, category, price, in_stock=True, age_days=0):
    return SimpleNamespace(
        id=product_id,
        name=name,
        category=category,
        price=price,
        image_url="",
        description="",
        in_stock=in_stock,
        created_at=datetime.now() - timedelta(days=age_days),
    )


@pytest.fixture()
def catalogue_store():
    return FakeCatalogueStore(
        [
            _product("p1", "Fresh Spinach", "vegetables", 5000, age_days=3),
            _product("p2", "Red Chili", "vegetables", 3000, age_days=2),
            _product("p3", "Fresh Tilapia Fish", "fish", 35000, age_days=1),
            _product("p4", "Chicken Nuggets", "frozen", 42000, in_stock=False),
        ]
    )


@pytest.fixture()
def credentials():
    return FakeCredentialLookup([{"username": "root", "password": "secret"}])


@pytest.fixture()
def channel():
    return FakeMessagingChannel()

import pytest


@pytest.fixture(autouse=True)
def _ctx(identity_bed, reset_domain_data):
    """Push the identity context for each test, cleanup after."""
    from identity.domain import identity

    with identity_bed.domain_context():
        yield

    reset_domain_data(identity)

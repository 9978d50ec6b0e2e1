import pytest


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed, reset_domain_data):
    """Push the catalogue context for each test, cleanup after."""
    from catalogue.domain import catalogue

    with catalogue_bed.domain_context():
        yield

    reset_domain_data(catalogue)

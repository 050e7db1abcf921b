import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def carts_bed():
    from carts.domain import carts

    bed = DomainFixture(carts)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(carts_bed):
    with carts_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def catalog():
    """A small stocked catalogue, swapped in for every test."""
    from carts.catalog import InMemoryCatalog, reset_catalog, set_catalog

    catalog = InMemoryCatalog()
    catalog.stock("sku-7", "12.50", name="Enamel Camp Mug")
    catalog.stock("A", "10.00", name="Trail Socks")
    catalog.stock("B", "4.25", name="Bandana")
    catalog.stock("C", "19.99", name="Headlamp")
    set_catalog(catalog)
    yield catalog
    reset_catalog()

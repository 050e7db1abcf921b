"""Tests for the product catalog port and factory."""

from decimal import Decimal

from carts.catalog import (
    InMemoryCatalog,
    ProductCatalog,
    demo_product_id,
    get_catalog,
    reset_catalog,
    set_catalog,
)


class TestInMemoryCatalog:
    def test_stock_and_lookup(self):
        catalog = InMemoryCatalog()
        catalog.stock("sku-1", 3.1, name="Spork")
        info = catalog.lookup("sku-1")
        assert info.name == "Spork"
        assert info.unit_price == Decimal("3.1")

    def test_unknown_product_is_none(self):
        assert InMemoryCatalog().lookup("nope") is None

    def test_delist(self):
        catalog = InMemoryCatalog()
        catalog.stock("sku-1", "1.00")
        catalog.delist("sku-1")
        assert catalog.lookup("sku-1") is None

    def test_stock_demo(self):
        catalog = InMemoryCatalog()
        stocked = catalog.stock_demo(3)
        assert [p.product_id for p in stocked] == ["demo-0001", "demo-0002", "demo-0003"]
        assert catalog.lookup(demo_product_id(2)).unit_price == Decimal("3.99")


class TestCatalogFactory:
    def test_default_is_in_memory(self):
        reset_catalog()
        assert isinstance(get_catalog(), InMemoryCatalog)

    def test_set_catalog_overrides(self):
        class FixedCatalog(ProductCatalog):
            def lookup(self, product_id):
                return None

        fixed = FixedCatalog()
        set_catalog(fixed)
        assert get_catalog() is fixed

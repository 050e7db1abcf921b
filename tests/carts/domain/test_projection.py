"""Tests for cart snapshots and totals."""

from decimal import Decimal

import pytest
from carts.cart.cart import Cart
from carts.cart.projection import CartTotals, project_cart, snapshot_cart
from carts.errors import ProductNotFound
from carts.owner import CartOwner

FEE = Decimal("8.00")


def _make_cart(**lines):
    cart = Cart.open(CartOwner.guest("tok-1"))
    for product_id, quantity in lines.items():
        cart.add_item(product_id, quantity, unit_price=Decimal("1.00"))
    return cart


class TestProjectCart:
    def test_empty_cart_has_no_shipping(self, catalog):
        totals = project_cart(_make_cart(), catalog, FEE)
        assert totals == CartTotals(
            item_count=0,
            subtotal=Decimal("0.00"),
            shipping_fee=Decimal("0.00"),
            total=Decimal("0.00"),
        )

    def test_totals_use_current_catalog_price(self, catalog):
        cart = _make_cart(A=2, B=1)
        totals = project_cart(cart, catalog, FEE)
        # A at 10.00, B at 4.25; the 1.00 snapshot is ignored
        assert totals.item_count == 3
        assert totals.subtotal == Decimal("24.25")
        assert totals.shipping_fee == Decimal("8.00")
        assert totals.total == Decimal("32.25")

    def test_repricing_changes_the_subtotal(self, catalog):
        cart = _make_cart(**{"sku-7": 2})
        catalog.stock("sku-7", "9.99")
        assert project_cart(cart, catalog, FEE).subtotal == Decimal("19.98")

    def test_money_is_quantized_to_cents(self, catalog):
        catalog.stock("A", "0.333")
        totals = project_cart(_make_cart(A=3), catalog, "5")
        assert totals.subtotal == Decimal("0.99")
        assert totals.shipping_fee == Decimal("5.00")
        assert totals.total == Decimal("5.99")

    def test_delisted_product_raises(self, catalog):
        cart = _make_cart(A=1, C=1)
        catalog.delist("C")
        with pytest.raises(ProductNotFound):
            project_cart(cart, catalog, FEE)


class TestSnapshotCart:
    def test_snapshot_lists_lines_by_product(self):
        cart = _make_cart(C=3, A=1)
        snapshot = snapshot_cart(cart)
        assert snapshot.owner == "guest:tok-1"
        assert [line.product_id for line in snapshot.items] == ["A", "C"]
        assert snapshot.item_count == 4
        assert snapshot.quantities() == {"A": 1, "C": 3}
        assert snapshot.items[0].unit_price_snapshot == Decimal("1.00")
        assert snapshot.last_modified_at == cart.last_modified_at

    def test_snapshot_of_empty_cart(self):
        snapshot = snapshot_cart(_make_cart())
        assert snapshot.items == ()
        assert snapshot.item_count == 0

    def test_lines_are_priced_from_the_current_catalogue(self, catalog):
        cart = _make_cart(A=2, C=3)

        snapshot = snapshot_cart(cart, catalog)

        a, c = snapshot.items
        assert (a.unit_price, a.line_total) == (Decimal("10.00"), Decimal("20.00"))
        assert (c.unit_price, c.line_total) == (Decimal("19.99"), Decimal("59.97"))
        # The snapshot price captured at add time is kept alongside
        assert c.unit_price_snapshot == Decimal("1.00")

    def test_delisted_line_is_left_unpriced(self, catalog):
        cart = _make_cart(A=1, B=1)
        catalog.delist("B")

        snapshot = snapshot_cart(cart, catalog)

        assert snapshot.items[1].product_id == "B"
        assert snapshot.items[1].unit_price is None
        assert snapshot.items[1].line_total is None
        assert snapshot.item_count == 2

    def test_without_a_catalogue_lines_are_unpriced(self):
        snapshot = snapshot_cart(_make_cart(A=1))
        assert snapshot.items[0].unit_price is None

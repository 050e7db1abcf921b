"""Shared BDD fixtures and step definitions for the Carts domain."""

import pytest
from carts.cart import service
from carts.domain import carts
from carts.errors import CartError
from carts.owner import CartOwner
from pytest_bdd import given, parsers, then

_KINDS = {"guest": CartOwner.guest, "customer": CartOwner.user}


def shopper(kind, ref) -> CartOwner:
    return _KINDS[kind](ref)


@pytest.fixture()
def error():
    """Container for the rejection raised by the last When step."""
    return {"exc": None}


@pytest.fixture()
def outcome():
    """Results of When steps that return something worth checking."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the catalogue lists "{product_id}" at {price}'))
def catalogue_lists(catalog, product_id, price):
    catalog.stock(product_id, price)


@given(parsers.cfparse('"{product_id}" is no longer sold'))
def product_delisted(catalog, product_id):
    catalog.delist(product_id)


@given(parsers.cfparse("the line limit is {limit:d}"))
def line_limit(monkeypatch, limit):
    monkeypatch.setattr(carts, "MAX_QUANTITY_PER_LINE", str(limit))


@given(parsers.cfparse('the {kind} "{ref}" has {qty:d} of "{product_id}" in their cart'))
def shopper_has(kind, ref, qty, product_id):
    service.mutate(shopper(kind, ref), "add", {"product_id": product_id, "quantity": qty})


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the {kind} "{ref}" cart holds {qty:d} of "{product_id}"'))
def cart_holds(kind, ref, qty, product_id):
    assert service.snapshot(shopper(kind, ref)).quantities().get(product_id) == qty


@then(parsers.cfparse('the {kind} "{ref}" cart has {count:d} line'))
def cart_has_one_line(kind, ref, count):
    assert len(service.snapshot(shopper(kind, ref)).items) == count


@then(parsers.cfparse('the {kind} "{ref}" cart has {count:d} lines'))
def cart_has_lines(kind, ref, count):
    assert len(service.snapshot(shopper(kind, ref)).items) == count


@then(parsers.cfparse('the {kind} "{ref}" cart is empty'))
def cart_is_empty(kind, ref):
    snapshot = service.snapshot(shopper(kind, ref))
    assert snapshot.items == ()
    assert snapshot.item_count == 0


@then(parsers.cfparse('the request is rejected with "{code}"'))
def request_rejected(error, code):
    assert isinstance(error["exc"], CartError)
    assert error["exc"].code == code

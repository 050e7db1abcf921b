"""Read views over a cart: the snapshot returned by mutations and the totals.

Both are pure functions of a loaded ``Cart``. Totals always use the current
catalogue price; the price snapshot stored on a line is display data only.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from carts.catalog.port import ProductCatalog
from carts.errors import ProductNotFound

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class LineView:
    product_id: str
    quantity: int
    unit_price_snapshot: Decimal | None
    added_at: datetime | None
    unit_price: Decimal | None = None
    line_total: Decimal | None = None


@dataclass(frozen=True)
class CartSnapshot:
    owner: str
    items: tuple[LineView, ...]
    item_count: int
    last_modified_at: datetime | None

    def quantities(self) -> dict[str, int]:
        return {line.product_id: line.quantity for line in self.items}


@dataclass(frozen=True)
class CartTotals:
    item_count: int
    subtotal: Decimal
    shipping_fee: Decimal
    total: Decimal


def _line_view(item, catalog: ProductCatalog | None) -> LineView:
    unit_price = line_total = None
    product = catalog.lookup(str(item.product_id)) if catalog is not None else None
    if product is not None:
        unit_price = to_money(product.unit_price)
        line_total = to_money(unit_price * item.quantity)
    return LineView(
        product_id=str(item.product_id),
        quantity=item.quantity,
        unit_price_snapshot=(to_money(item.unit_price_snapshot) if item.unit_price_snapshot is not None else None),
        added_at=item.added_at,
        unit_price=unit_price,
        line_total=line_total,
    )


def snapshot_cart(cart, catalog: ProductCatalog | None = None) -> CartSnapshot:
    """The cart's lines in product order.

    With a ``catalog``, each line also carries its current unit price and line
    total. A product the catalogue no longer knows is left unpriced here;
    ``project_cart`` is where it fails.
    """
    items = tuple(sorted((_line_view(item, catalog) for item in cart.items), key=lambda line: line.product_id))
    return CartSnapshot(
        owner=cart.owner_key,
        items=items,
        item_count=sum(line.quantity for line in items),
        last_modified_at=cart.last_modified_at,
    )


def project_cart(cart, catalog: ProductCatalog, shipping_fee) -> CartTotals:
    """Compute item count, subtotal, shipping and total for ``cart``.

    Raises ``ProductNotFound`` when a line references a product the catalogue
    no longer knows.
    """
    item_count = 0
    subtotal = ZERO
    for item in cart.items:
        product = catalog.lookup(str(item.product_id))
        if product is None:
            raise ProductNotFound(f"Product {item.product_id} in cart {cart.owner_key} no longer exists")
        item_count += item.quantity
        subtotal += to_money(product.unit_price) * item.quantity

    fee = to_money(shipping_fee) if item_count > 0 else ZERO
    subtotal = to_money(subtotal)
    return CartTotals(
        item_count=item_count,
        subtotal=subtotal,
        shipping_fee=fee,
        total=to_money(subtotal + fee),
    )

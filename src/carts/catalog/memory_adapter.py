"""In-memory product catalog for development and testing."""

import threading
from decimal import Decimal

from carts.catalog.port import ProductCatalog, ProductInfo


class InMemoryCatalog(ProductCatalog):
    def __init__(self) -> None:
        self._products: dict[str, ProductInfo] = {}
        self._lock = threading.Lock()

    def stock(self, product_id: str, unit_price, name: str | None = None) -> ProductInfo:
        """Add or reprice a product."""
        info = ProductInfo(
            product_id=product_id,
            name=name or product_id,
            unit_price=Decimal(str(unit_price)),
        )
        with self._lock:
            self._products[product_id] = info
        return info

    def delist(self, product_id: str) -> None:
        with self._lock:
            self._products.pop(product_id, None)

    def lookup(self, product_id: str) -> ProductInfo | None:
        with self._lock:
            return self._products.get(product_id)

    def stock_demo(self, count: int) -> list[ProductInfo]:
        """Stock ``demo-0001`` .. ``demo-NNNN`` with prices from 1.99 to 40.99."""
        return [
            self.stock(demo_product_id(n), f"{n % 40 + 1}.99", name=f"Demo product {n}")
            for n in range(1, count + 1)
        ]


def demo_product_id(n: int) -> str:
    return f"demo-{n:04d}"

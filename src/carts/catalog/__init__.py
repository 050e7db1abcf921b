"""Product catalog factory.

Provides get_catalog() / set_catalog() to swap implementations:
- InMemoryCatalog for development and testing
- any adapter over the real catalogue service in production
"""

from carts.catalog.memory_adapter import InMemoryCatalog, demo_product_id
from carts.catalog.port import ProductCatalog, ProductInfo

__all__ = [
    "InMemoryCatalog",
    "ProductCatalog",
    "ProductInfo",
    "demo_product_id",
    "get_catalog",
    "reset_catalog",
    "set_catalog",
]

_current_catalog: ProductCatalog | None = None


def get_catalog() -> ProductCatalog:
    """Return the current product catalog. Defaults to InMemoryCatalog."""
    global _current_catalog
    if _current_catalog is None:
        _current_catalog = InMemoryCatalog()
    return _current_catalog


def set_catalog(catalog: ProductCatalog) -> None:
    """Override the active product catalog (useful for tests)."""
    global _current_catalog
    _current_catalog = catalog


def reset_catalog() -> None:
    """Reset to default catalog."""
    global _current_catalog
    _current_catalog = None

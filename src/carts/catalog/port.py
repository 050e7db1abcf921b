"""Product catalog port (abstract interface).

Carts only need to know whether a product exists and what it costs right now.
Adapters answer that from whatever owns the catalogue.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ProductInfo:
    """Current catalogue facts about a product."""

    product_id: str
    name: str
    unit_price: Decimal


class ProductCatalog(ABC):
    """Abstract product lookup."""

    @abstractmethod
    def lookup(self, product_id: str) -> ProductInfo | None:
        """Return the product, or None when the catalogue does not know it."""
        ...

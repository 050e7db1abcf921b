"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state, with no cross-user sharing.
The cart itself is addressed by whoever is calling (guest cookie or
``X-User-Id``), so state tracks what the shopper expects to find there.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks one simulated shopper through browse, sign-in and merge."""

    customer_id: str | None = None
    guest_lines: dict[str, int] = field(default_factory=dict)
    customer_lines: dict[str, int] = field(default_factory=dict)
    merged_lines: int = 0

    def expect(self, lines: dict[str, int], snapshot: dict) -> bool:
        """True when the ``CartResponse`` body holds exactly ``lines``."""
        return {line["product_id"]: line["quantity"] for line in snapshot["items"]} == lines

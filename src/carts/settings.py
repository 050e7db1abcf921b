"""Typed accessors over the ``[custom]`` constants in ``domain.toml``.

Protean copies every ``[custom]`` key onto the domain object as-is. Values
coming through ``${ENV|default}`` substitution are strings, so they are
coerced here.
"""

from decimal import Decimal

from carts.domain import carts

DEFAULT_MAX_QUANTITY_PER_LINE = 99
DEFAULT_SHIPPING_FEE = Decimal("8.00")
DEFAULT_GUEST_COOKIE_NAME = "guest_token"
DEFAULT_GUEST_COOKIE_MAX_AGE = 60 * 60 * 24 * 30


def max_quantity_per_line() -> int:
    return int(getattr(carts, "MAX_QUANTITY_PER_LINE", DEFAULT_MAX_QUANTITY_PER_LINE))


def shipping_fee() -> Decimal:
    return Decimal(str(getattr(carts, "SHIPPING_FEE", DEFAULT_SHIPPING_FEE)))


def guest_cookie_name() -> str:
    return str(getattr(carts, "GUEST_COOKIE_NAME", DEFAULT_GUEST_COOKIE_NAME))


def guest_cookie_max_age() -> int:
    return int(getattr(carts, "GUEST_COOKIE_MAX_AGE", DEFAULT_GUEST_COOKIE_MAX_AGE))


def demo_products() -> int:
    """How many demo products to stock in the in-memory catalogue at startup."""
    return int(getattr(carts, "DEMO_PRODUCTS", 0) or 0)

"""Carts bounded context: guest and customer shopping carts.

Owns cart line items keyed by owner (guest token or user id), the mutations
applied to them, and the one-time fold of a guest cart into a customer's cart
at sign-in.
"""

from protean.domain import Domain

from carts.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

carts = Domain(name="carts")

"""Domain events for the Cart aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from carts.domain import carts


@carts.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or its line grew."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_key = String(required=True, max_length=300)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    new_quantity = Integer(required=True)
    clamped = Boolean(default=False)


@carts.event(part_of="Cart")
class CartItemQuantityUpdated:
    """A line's quantity was set to an explicit value."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_key = String(required=True, max_length=300)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@carts.event(part_of="Cart")
class CartItemRemoved:
    """A line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_key = String(required=True, max_length=300)
    product_id = Identifier(required=True)


@carts.event(part_of="Cart")
class CartCleared:
    """Every line was removed. The cart itself stays."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_key = String(required=True, max_length=300)
    lines_removed = Integer(required=True)


@carts.event(part_of="Cart")
class GuestCartMerged:
    """A guest cart was folded into a customer's cart and left as a tombstone."""

    __version__ = 1

    cart_id = Identifier(required=True)
    guest_owner_key = String(required=True, max_length=300)
    merged_into = String(required=True, max_length=300)
    lines_merged = Integer(required=True)
    merged_at = DateTime(required=True)


@carts.event(part_of="Cart")
class CartDiscarded:
    """A cart record was physically deleted."""

    __version__ = 1

    cart_id = Identifier(required=True)
    owner_key = String(required=True, max_length=300)
    status = String(required=True, max_length=20)

"""Cart aggregate (CQRS): one cart per owner, either a guest or a signed-in customer.

The cart is a standard CQRS aggregate (not event sourced). It is addressed by
``owner_key`` rather than by its own id: every incarnation of an owner's cart
gets a fresh id, so a discarded cart never collides with its successor's
event stream.

A guest cart that has been folded into a customer's cart is kept for a short
while as a ``Merged`` tombstone, which never reads as content and is never
merged twice.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String
from protean.fields import Decimal as DecimalField

from carts.cart.events import (
    CartCleared,
    CartDiscarded,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
    GuestCartMerged,
)
from carts.domain import carts
from carts.errors import InvalidQuantity, LineNotFound
from carts.owner import CartOwner, OwnerKind


class CartStatus(Enum):
    ACTIVE = "Active"
    MERGED = "Merged"


def _require_quantity(quantity, max_per_line=None):
    # bool is an int subclass; True is not a quantity
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity(f"Quantity must be a whole number, got {quantity!r}")
    if quantity <= 0:
        raise InvalidQuantity(f"Quantity must be at least 1, got {quantity}")
    if max_per_line is not None and quantity > max_per_line:
        raise InvalidQuantity(f"Quantity must not exceed {max_per_line}, got {quantity}")


@carts.entity(part_of="Cart")
class LineItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    unit_price_snapshot = DecimalField(precision=12, scale=2)
    added_at = DateTime()


@carts.aggregate
class Cart:
    owner_key = String(required=True, max_length=300, unique=True)
    owner_kind = String(required=True, choices=OwnerKind)
    owner_ref = String(required=True, max_length=255)
    items = HasMany(LineItem)
    status = String(choices=CartStatus, default=CartStatus.ACTIVE.value)
    merged_into = String(max_length=300)
    created_at = DateTime()
    last_modified_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear on only one line"]})

    @invariant.post
    def tombstone_must_name_its_target(self):
        if self.status == CartStatus.MERGED.value and not self.merged_into:
            raise ValidationError({"merged_into": ["A merged cart must record the cart it merged into"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, owner: CartOwner):
        """A fresh, unsaved, empty cart for ``owner``."""
        now = datetime.now(UTC)
        return cls(
            owner_key=owner.key,
            owner_kind=owner.kind.value,
            owner_ref=owner.ref,
            status=CartStatus.ACTIVE.value,
            created_at=now,
            last_modified_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def owner(self) -> CartOwner:
        return CartOwner(OwnerKind(self.owner_kind), self.owner_ref)

    @property
    def is_merged(self) -> bool:
        return self.status == CartStatus.MERGED.value

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def _touch(self):
        now = datetime.now(UTC)
        self.last_modified_at = now
        return now

    def _ensure_active(self):
        if self.is_merged:
            raise ValidationError({"status": ["A merged cart can no longer be changed"]})

    def add_item(self, product_id, quantity, unit_price=None, max_per_line=None):
        """Add ``quantity`` of a product, growing an existing line.

        The resulting line quantity is clamped to ``max_per_line``. The price
        snapshot is refreshed on every add.
        """
        self._ensure_active()
        _require_quantity(quantity)

        existing = self.line_for(product_id)
        requested = (existing.quantity if existing else 0) + quantity
        new_quantity = min(requested, max_per_line) if max_per_line else requested
        now = self._touch()

        if existing:
            existing.quantity = new_quantity
            if unit_price is not None:
                existing.unit_price_snapshot = unit_price
        else:
            self.add_items(
                LineItem(
                    product_id=product_id,
                    quantity=new_quantity,
                    unit_price_snapshot=unit_price,
                    added_at=now,
                )
            )

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                owner_key=self.owner_key,
                product_id=str(product_id),
                quantity_added=quantity,
                new_quantity=new_quantity,
                clamped=new_quantity < requested,
            )
        )

    def update_item_quantity(self, product_id, quantity, max_per_line=None):
        """Set a line to an exact quantity. Out-of-range values are rejected, not clamped."""
        self._ensure_active()
        _require_quantity(quantity, max_per_line)

        line = self.line_for(product_id)
        if line is None:
            raise LineNotFound(f"Product {product_id} is not in the cart")

        previous_quantity = line.quantity
        line.quantity = quantity
        self._touch()

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                owner_key=self.owner_key,
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id) -> bool:
        """Remove a line. Returns False, changing nothing, when there is no such line."""
        self._ensure_active()

        line = self.line_for(product_id)
        if line is None:
            return False

        self.remove_items(line)
        self._touch()

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                owner_key=self.owner_key,
                product_id=str(product_id),
            )
        )
        return True

    def clear(self) -> int:
        """Remove every line and return how many there were."""
        self._ensure_active()

        lines = list(self.items)
        if not lines:
            return 0

        self.remove_items(lines)
        self._touch()

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                owner_key=self.owner_key,
                lines_removed=len(lines),
            )
        )
        return len(lines)

    # -------------------------------------------------------------------
    # Merging (guest → customer)
    # -------------------------------------------------------------------
    def absorb(self, guest_lines, max_per_line=None) -> int:
        """Fold guest lines into this cart.

        Quantities for products already here are summed and clamped; other
        lines are copied over unchanged, price snapshot included.
        """
        self._ensure_active()

        merged = 0
        now = datetime.now(UTC)
        for guest_line in guest_lines:
            existing = self.line_for(guest_line.product_id)
            if existing:
                total = existing.quantity + guest_line.quantity
                existing.quantity = min(total, max_per_line) if max_per_line else total
            else:
                self.add_items(
                    LineItem(
                        product_id=guest_line.product_id,
                        quantity=guest_line.quantity,
                        unit_price_snapshot=guest_line.unit_price_snapshot,
                        added_at=guest_line.added_at or now,
                    )
                )
            merged += 1

        if merged:
            self.last_modified_at = now
        return merged

    def mark_merged(self, into_owner_key, lines_merged):
        """Turn this guest cart into a tombstone pointing at the customer's cart."""
        self._ensure_active()

        self.merged_into = into_owner_key
        self.status = CartStatus.MERGED.value
        now = self._touch()

        self.raise_(
            GuestCartMerged(
                cart_id=str(self.id),
                guest_owner_key=self.owner_key,
                merged_into=into_owner_key,
                lines_merged=lines_merged,
                merged_at=now,
            )
        )

    def discard(self):
        """Drop every line ahead of deleting the record."""
        lines = list(self.items)
        if lines:
            self.remove_items(lines)

        self.raise_(
            CartDiscarded(
                cart_id=str(self.id),
                owner_key=self.owner_key,
                status=self.status,
            )
        )

"""Guest cart merge commands and handler.

Merging happens in two steps, each its own Unit of Work:

1. ``MergeGuestCart`` folds the guest's lines into the customer's cart and
   turns the guest cart into a ``Merged`` tombstone in the same commit.
2. ``DiscardCart`` deletes the tombstone.

Once step 1 has committed it is never repeated for the same guest cart: a
tombstone found by a later merge skips straight to step 2.
"""

from dataclasses import dataclass

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from carts import settings
from carts.cart.cart import Cart
from carts.domain import carts
from carts.owner import CartOwner


@carts.command(part_of="Cart")
class MergeGuestCart:
    guest_owner_key = String(required=True, max_length=300)
    user_owner_key = String(required=True, max_length=300)


@carts.command(part_of="Cart")
class DiscardCart:
    owner_key = String(required=True, max_length=300)


@carts.command_handler(part_of=Cart)
class MergeCartsHandler:
    @handle(MergeGuestCart)
    def merge_guest_cart(self, command):
        """Fold the guest cart into the customer's cart.

        Returns ``{"guest_found": bool, "already_merged": bool, "merged_lines": int}``.
        """
        repo = current_domain.repository_for(Cart)
        guest_cart = repo.find_by_owner(CartOwner.parse(command.guest_owner_key))

        if guest_cart is None:
            return {"guest_found": False, "already_merged": False, "merged_lines": 0}
        if guest_cart.is_merged:
            return {"guest_found": True, "already_merged": True, "merged_lines": 0}

        lines = list(guest_cart.items)
        if not lines:
            # Nothing to fold; the empty guest cart only needs disposing of
            guest_cart.mark_merged(command.user_owner_key, lines_merged=0)
            repo.add(guest_cart)
            return {"guest_found": True, "already_merged": False, "merged_lines": 0}

        user_cart = repo.for_update(CartOwner.parse(command.user_owner_key))
        merged_lines = user_cart.absorb(lines, max_per_line=settings.max_quantity_per_line())
        guest_cart.mark_merged(user_cart.owner_key, lines_merged=merged_lines)

        repo.add(user_cart)
        repo.add(guest_cart)

        return {"guest_found": True, "already_merged": False, "merged_lines": merged_lines}

    @handle(DiscardCart)
    def discard_cart(self, command):
        """Delete the owner's merged cart record. Returns whether a record was deleted."""
        repo = current_domain.repository_for(Cart)
        cart = repo.find_by_owner(CartOwner.parse(command.owner_key))
        if cart is None or not cart.is_merged:
            return False

        repo.discard(cart)
        return True


@dataclass(frozen=True)
class MergeOutcome:
    merged_lines: int
    guest_discarded: bool

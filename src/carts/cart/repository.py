"""Cart store, keyed by owner."""

from carts.cart.cart import Cart
from carts.domain import carts
from carts.owner import CartOwner


@carts.repository(part_of=Cart)
class CartRepository:
    """Owner-keyed access to carts.

    The base repository provides ``add`` (put) and ``get`` by cart id. Readers
    and handlers here never see a cart that belongs to another owner, and a
    missing owner always yields an empty, unsaved cart rather than an error.
    """

    def find_by_owner(self, owner: CartOwner) -> Cart | None:
        """The stored record for ``owner``, tombstone included."""
        return self.query.filter(owner_key=owner.key).all().first

    def peek(self, owner: CartOwner) -> Cart:
        """Read-only view. A tombstone reads as an empty cart."""
        cart = self.find_by_owner(owner)
        if cart is None or cart.is_merged:
            return Cart.open(owner)
        return cart

    def for_update(self, owner: CartOwner) -> Cart:
        """Cart to mutate inside a Unit of Work. A tombstone is purged first."""
        cart = self.find_by_owner(owner)
        if cart is None:
            return Cart.open(owner)
        if cart.is_merged:
            self.discard(cart)
            return Cart.open(owner)
        return cart

    def discard(self, cart: Cart) -> None:
        """Delete line items, then the cart record itself."""
        cart.discard()
        self.add(cart)
        # Repositories have no remove; hard deletion goes through the DAO
        self._dao.delete(cart)

    def delete_owner(self, owner: CartOwner) -> bool:
        """Delete ``owner``'s cart. An absent owner is a no-op."""
        cart = self.find_by_owner(owner)
        if cart is None:
            return False
        self.discard(cart)
        return True

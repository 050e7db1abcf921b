"""Cart mutation commands, payload validation and handler.

Each mutation is one read-modify-write of an owner's cart inside the command
handler's Unit of Work. Operations that change nothing (removing an absent
line, clearing an empty cart) leave the store untouched.
"""

from decimal import Decimal
from enum import Enum

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from carts import settings
from carts.cart.cart import Cart
from carts.catalog import get_catalog
from carts.domain import carts
from carts.errors import InvalidQuantity, ProductNotFound, UnknownOperation
from carts.owner import CartOwner

CENTS = Decimal("0.01")


class Operation(Enum):
    ADD = "add"
    UPDATE = "update"
    REMOVE = "remove"
    CLEAR = "clear"


@carts.command(part_of="Cart")
class AddCartItem:
    owner_key = String(required=True, max_length=300)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@carts.command(part_of="Cart")
class UpdateCartItem:
    owner_key = String(required=True, max_length=300)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@carts.command(part_of="Cart")
class RemoveCartItem:
    owner_key = String(required=True, max_length=300)
    product_id = Identifier(required=True)


@carts.command(part_of="Cart")
class ClearCart:
    owner_key = String(required=True, max_length=300)


# ---------------------------------------------------------------------------
# Payload validation
# ---------------------------------------------------------------------------
def _product_id(payload) -> str:
    product_id = payload.get("product_id")
    if not isinstance(product_id, str) or not product_id.strip():
        raise ValidationError({"product_id": ["A product id is required"]})
    return product_id


def _quantity(payload, default=None) -> int:
    quantity = payload.get("quantity", default)
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity(f"Quantity must be a whole number, got {quantity!r}")
    if quantity <= 0:
        raise InvalidQuantity(f"Quantity must be at least 1, got {quantity}")
    return quantity


def build_command(owner: CartOwner, operation, payload=None):
    """Translate an operation tag and its payload into a cart command."""
    payload = payload or {}
    try:
        op = Operation(operation.value if isinstance(operation, Operation) else operation)
    except ValueError:
        raise UnknownOperation(f"Unknown cart operation: {operation!r}") from None

    if op is Operation.ADD:
        return AddCartItem(owner_key=owner.key, product_id=_product_id(payload), quantity=_quantity(payload, 1))
    if op is Operation.UPDATE:
        return UpdateCartItem(owner_key=owner.key, product_id=_product_id(payload), quantity=_quantity(payload))
    if op is Operation.REMOVE:
        return RemoveCartItem(owner_key=owner.key, product_id=_product_id(payload))
    return ClearCart(owner_key=owner.key)


@carts.command_handler(part_of=Cart)
class MutateCartHandler:
    @handle(AddCartItem)
    def add_cart_item(self, command):
        product = get_catalog().lookup(command.product_id)
        if product is None:
            raise ProductNotFound(f"Product {command.product_id} does not exist")

        repo = current_domain.repository_for(Cart)
        cart = repo.for_update(CartOwner.parse(command.owner_key))
        cart.add_item(
            product_id=command.product_id,
            quantity=command.quantity,
            unit_price=product.unit_price.quantize(CENTS),
            max_per_line=settings.max_quantity_per_line(),
        )
        repo.add(cart)
        return cart

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_update(CartOwner.parse(command.owner_key))
        cart.update_item_quantity(
            product_id=command.product_id,
            quantity=command.quantity,
            max_per_line=settings.max_quantity_per_line(),
        )
        repo.add(cart)
        return cart

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_update(CartOwner.parse(command.owner_key))
        if cart.remove_item(command.product_id):
            repo.add(cart)
        return cart

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_update(CartOwner.parse(command.owner_key))
        if cart.clear():
            repo.add(cart)
        return cart

"""Cart error taxonomy.

Every error carries ``messages = {code: [detail]}`` like Protean's own
``ValidationError``, plus the HTTP status the API layer answers with.
"""

from protean.exceptions import ProteanExceptionWithMessage


class CartError(ProteanExceptionWithMessage):
    code = "cart_error"
    status_code = 400

    def __init__(self, detail: str, **kwargs) -> None:
        self.detail = detail
        super().__init__({self.code: [detail]}, **kwargs)


class InvalidQuantity(CartError):
    code = "invalid_quantity"
    status_code = 400


class ProductNotFound(CartError):
    code = "product_not_found"
    status_code = 404


class LineNotFound(CartError):
    code = "line_not_found"
    status_code = 404


class StoreUnavailable(CartError):
    """The cart store failed or a concurrent commit won. The cart is unchanged."""

    code = "store_unavailable"
    status_code = 503


class MergeConflict(CartError):
    """Reserved for non-additive merge policies."""

    code = "merge_conflict"
    status_code = 409


class InvalidOwner(CartError):
    code = "invalid_owner"
    status_code = 400


class UnknownOperation(CartError):
    code = "unknown_operation"
    status_code = 400

"""FastAPI routes for the Carts domain.

The caller never names a cart: every route acts on the cart of whoever is
making the request (see ``carts.api.actor``).
"""

from fastapi import APIRouter, Depends, Request, Response

from carts import settings
from carts.api.actor import guest_token, require_user, resolve_actor
from carts.api.schemas import (
    AddItemRequest,
    CartCountResponse,
    CartResponse,
    CartSummaryResponse,
    MergeResponse,
    UpdateItemRequest,
)
from carts.cart import service
from carts.cart.mutation import Operation
from carts.owner import CartOwner

router = APIRouter(prefix="/cart", tags=["cart"])


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
@router.get("", response_model=CartResponse)
async def get_cart(owner: CartOwner = Depends(resolve_actor)) -> CartResponse:
    return CartResponse.from_snapshot(service.snapshot(owner))


@router.get("/summary", response_model=CartSummaryResponse)
async def get_cart_summary(owner: CartOwner = Depends(resolve_actor)) -> CartSummaryResponse:
    totals = service.project(owner)
    return CartSummaryResponse(
        item_count=totals.item_count,
        subtotal=totals.subtotal,
        shipping_fee=totals.shipping_fee,
        total=totals.total,
    )


@router.get("/count", response_model=CartCountResponse)
async def get_cart_count(owner: CartOwner = Depends(resolve_actor)) -> CartCountResponse:
    return CartCountResponse(count=service.item_count(owner))


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------
@router.post("/items", response_model=CartResponse)
async def add_item(body: AddItemRequest, owner: CartOwner = Depends(resolve_actor)) -> CartResponse:
    snapshot = service.mutate(owner, Operation.ADD, {"product_id": body.product_id, "quantity": body.quantity})
    return CartResponse.from_snapshot(snapshot)


@router.put("/items/{product_id}", response_model=CartResponse)
async def update_item(
    product_id: str, body: UpdateItemRequest, owner: CartOwner = Depends(resolve_actor)
) -> CartResponse:
    snapshot = service.mutate(owner, Operation.UPDATE, {"product_id": product_id, "quantity": body.quantity})
    return CartResponse.from_snapshot(snapshot)


@router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_item(product_id: str, owner: CartOwner = Depends(resolve_actor)) -> CartResponse:
    snapshot = service.mutate(owner, Operation.REMOVE, {"product_id": product_id})
    return CartResponse.from_snapshot(snapshot)


@router.delete("", response_model=CartResponse)
async def clear_cart(owner: CartOwner = Depends(resolve_actor)) -> CartResponse:
    return CartResponse.from_snapshot(service.mutate(owner, Operation.CLEAR))


# ---------------------------------------------------------------------------
# Sign-in
# ---------------------------------------------------------------------------
@router.post("/merge", response_model=MergeResponse)
async def merge_guest_cart(
    request: Request, response: Response, user: CartOwner = Depends(require_user)
) -> MergeResponse:
    """Called by the host once per sign-in. Folds the guest cart into the customer's."""
    token = guest_token(request)
    if token is None:
        return MergeResponse(merged_lines=0, guest_discarded=False)

    outcome = service.merge(token, user.ref)
    response.delete_cookie(settings.guest_cookie_name())
    return MergeResponse(merged_lines=outcome.merged_lines, guest_discarded=outcome.guest_discarded)

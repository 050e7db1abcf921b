"""Pydantic request/response schemas for the Carts API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class AddItemRequest(BaseModel):
    product_id: str
    quantity: int = 1

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "sku-7",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateItemRequest(BaseModel):
    quantity: int


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class LineItemSchema(BaseModel):
    product_id: str
    quantity: int
    unit_price_snapshot: Decimal | None = None
    added_at: datetime | None = None
    unit_price: Decimal | None = None
    line_total: Decimal | None = None


class CartResponse(BaseModel):
    owner: str
    items: list[LineItemSchema]
    item_count: int
    last_modified_at: datetime | None = None

    @classmethod
    def from_snapshot(cls, snapshot) -> "CartResponse":
        return cls(
            owner=snapshot.owner,
            items=[
                LineItemSchema(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    unit_price_snapshot=line.unit_price_snapshot,
                    added_at=line.added_at,
                    unit_price=line.unit_price,
                    line_total=line.line_total,
                )
                for line in snapshot.items
            ],
            item_count=snapshot.item_count,
            last_modified_at=snapshot.last_modified_at,
        )


class CartSummaryResponse(BaseModel):
    item_count: int
    subtotal: Decimal
    shipping_fee: Decimal
    total: Decimal


class CartCountResponse(BaseModel):
    count: int


class MergeResponse(BaseModel):
    merged_lines: int
    guest_discarded: bool

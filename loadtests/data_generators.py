"""Faker-based data generators for Locust load test scenarios.

Product ids come from the demo catalogue the app stocks at startup when
``CARTS_DEMO_PRODUCTS`` is set, so every generated add passes the catalogue
check. Payloads match the field names of the API's Pydantic request schemas.
"""

import os
import random
import uuid

from faker import Faker

fake = Faker()

DEMO_PRODUCTS = int(os.environ.get("CARTS_DEMO_PRODUCTS", "50"))


def demo_product_id() -> str:
    """A product id stocked by the demo catalogue (``demo-0001`` ..)."""
    return f"demo-{random.randint(1, DEMO_PRODUCTS):04d}"


def distinct_product_ids(count: int) -> list[str]:
    """``count`` different demo product ids."""
    picks = random.sample(range(1, DEMO_PRODUCTS + 1), k=min(count, DEMO_PRODUCTS))
    return [f"demo-{n:04d}" for n in picks]


def unknown_product_id() -> str:
    """A product id the catalogue will never know."""
    return f"gone-{uuid.uuid4().hex[:8]}"


def add_item_data(product_id: str | None = None, quantity: int | None = None) -> dict:
    """AddItemRequest payload. Shoppers mostly add one or two at a time."""
    return {
        "product_id": product_id or demo_product_id(),
        "quantity": quantity or random.choices([1, 2, 3, 5], weights=[60, 25, 10, 5])[0],
    }


def update_item_data(quantity: int | None = None) -> dict:
    """UpdateItemRequest payload."""
    return {"quantity": quantity or random.randint(1, 6)}


def customer_id() -> str:
    """Identity gateway style customer id, e.g. ``cust-jsmith-1a2b``."""
    return f"cust-{fake.user_name()[:20]}-{uuid.uuid4().hex[:4]}"


def customer_headers(user_id: str) -> dict:
    return {"X-User-Id": user_id}

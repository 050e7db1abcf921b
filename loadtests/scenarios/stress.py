"""Stress scenarios for per-owner write serialization.

SameCartHammerUser sends bursts of concurrent adds to one customer's cart
and checks none are lost. SpikeUser simulates a flash sale: many new guests
each adding a single item.
"""

import uuid

from gevent.pool import Pool
from locust import HttpUser, between, constant_pacing, task

from loadtests.data_generators import add_item_data, customer_headers, demo_product_id
from loadtests.helpers.response import extract_error_detail

BURST = 8


class SameCartHammerUser(HttpUser):
    """Concurrent writes to a single owner's cart.

    Every burst adds 1 of the same product BURST times in parallel, then reads
    the count back. A count short of BURST means an add was lost.
    """

    wait_time = constant_pacing(1)

    @task
    def burst_of_adds(self):
        headers = customer_headers(f"hammer-{uuid.uuid4().hex[:8]}")
        product_id = demo_product_id()

        def add(_):
            return self.client.post(
                "/cart/items",
                json={"product_id": product_id, "quantity": 1},
                headers=headers,
                name="[STRESS] POST /cart/items",
            )

        Pool(BURST).map(add, range(BURST))

        with self.client.get(
            "/cart/count",
            headers=headers,
            catch_response=True,
            name="[STRESS] GET /cart/count",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Count failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif resp.json()["count"] != BURST:
                resp.failure(f"Lost writes: expected {BURST}, cart holds {resp.json()['count']}")


class SpikeUser(HttpUser):
    """Flash sale: fresh guests arriving and adding one item each."""

    wait_time = between(0.1, 0.5)

    @task
    def one_item_guest(self):
        self.client.cookies.clear()
        self.client.post("/cart/items", json=add_item_data(quantity=1), name="[SPIKE] POST /cart/items")

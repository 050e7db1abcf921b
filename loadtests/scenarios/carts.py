"""Cart load test scenarios.

Stateful SequentialTaskSet journeys covering a guest browsing and changing
their mind, a guest signing in and having their cart merged, and a signed-in
customer checking totals. Locust's HTTP session keeps the guest cookie the
API mints on first contact, exactly as a browser would.
"""

import random

from locust import SequentialTaskSet, task

from loadtests.data_generators import (
    add_item_data,
    customer_headers,
    customer_id,
    distinct_product_ids,
    unknown_product_id,
    update_item_data,
)
from loadtests.helpers.response import error_code, extract_error_detail
from loadtests.helpers.state import ShopperState


class GuestBrowseJourney(SequentialTaskSet):
    """Add 3 items -> Update one -> Remove one -> Summary -> Clear.

    Models an anonymous shopper who fills a cart, changes their mind and
    walks away. Generates CartItemAdded (x3), CartItemQuantityUpdated,
    CartItemRemoved and CartCleared.
    """

    def on_start(self):
        self.client.cookies.clear()
        self.state = ShopperState()
        self.products = distinct_product_ids(3)

    @task
    def add_items(self):
        for product_id in self.products:
            payload = add_item_data(product_id)
            with self.client.post(
                "/cart/items",
                json=payload,
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 200:
                    self.state.guest_lines[product_id] = payload["quantity"]
                else:
                    resp.failure(f"Add item failed: {resp.status_code}: {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def update_item(self):
        product_id = self.products[0]
        payload = update_item_data()
        with self.client.put(
            f"/cart/items/{product_id}",
            json=payload,
            catch_response=True,
            name="PUT /cart/items/{product_id}",
        ) as resp:
            if resp.status_code == 200:
                self.state.guest_lines[product_id] = payload["quantity"]
            else:
                resp.failure(f"Update item failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def remove_item(self):
        product_id = self.products[1]
        with self.client.delete(
            f"/cart/items/{product_id}",
            catch_response=True,
            name="DELETE /cart/items/{product_id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Remove item failed: {resp.status_code}: {extract_error_detail(resp)}")
                return
            self.state.guest_lines.pop(product_id, None)
            if not self.state.expect(self.state.guest_lines, resp.json()):
                resp.failure(f"Cart drifted: expected {self.state.guest_lines}")

    @task
    def view_summary(self):
        with self.client.get("/cart/summary", catch_response=True, name="GET /cart/summary") as resp:
            if resp.status_code != 200:
                resp.failure(f"Summary failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif resp.json()["item_count"] != sum(self.state.guest_lines.values()):
                resp.failure("Summary item count does not match the cart")

    @task
    def clear_cart(self):
        with self.client.delete("/cart", catch_response=True, name="DELETE /cart") as resp:
            if resp.status_code != 200:
                resp.failure(f"Clear failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class SignInMergeJourney(SequentialTaskSet):
    """Guest adds items -> Customer adds items -> Sign in (merge) -> Merge again.

    The second merge must find nothing left to fold. Generates
    CartItemAdded, GuestCartMerged and CartDiscarded.
    """

    def on_start(self):
        self.client.cookies.clear()
        self.state = ShopperState(customer_id=customer_id())
        self.products = distinct_product_ids(4)

    @task
    def guest_adds(self):
        for product_id in self.products[:3]:
            payload = add_item_data(product_id)
            with self.client.post(
                "/cart/items",
                json=payload,
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 200:
                    self.state.guest_lines[product_id] = payload["quantity"]
                else:
                    resp.failure(f"Guest add failed: {resp.status_code}: {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def customer_adds(self):
        # One product overlaps with the guest cart so the merge has to sum
        for product_id in (self.products[0], self.products[3]):
            payload = add_item_data(product_id)
            with self.client.post(
                "/cart/items",
                json=payload,
                headers=customer_headers(self.state.customer_id),
                catch_response=True,
                name="POST /cart/items [customer]",
            ) as resp:
                if resp.status_code == 200:
                    self.state.customer_lines[product_id] = payload["quantity"]
                else:
                    resp.failure(f"Customer add failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def sign_in(self):
        with self.client.post(
            "/cart/merge",
            headers=customer_headers(self.state.customer_id),
            catch_response=True,
            name="POST /cart/merge",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Merge failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()
            self.state.merged_lines = resp.json()["merged_lines"]
            if self.state.merged_lines != len(self.state.guest_lines):
                resp.failure(f"Merged {self.state.merged_lines} lines, expected {len(self.state.guest_lines)}")

    @task
    def sign_in_again(self):
        with self.client.post(
            "/cart/merge",
            headers=customer_headers(self.state.customer_id),
            catch_response=True,
            name="POST /cart/merge [repeat]",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Repeat merge failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif resp.json()["merged_lines"] != 0:
                resp.failure("Repeat merge folded lines twice")

    @task
    def verify_customer_cart(self):
        with self.client.get(
            "/cart/count",
            headers=customer_headers(self.state.customer_id),
            catch_response=True,
            name="GET /cart/count [customer]",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Count failed: {resp.status_code}: {extract_error_detail(resp)}")
                return
            expected = sum(self.state.guest_lines.values()) + sum(self.state.customer_lines.values())
            if resp.json()["count"] != expected:
                resp.failure(f"Customer cart holds {resp.json()['count']} items, expected {expected}")

    @task
    def done(self):
        self.interrupt()


class CustomerCheckoutPrepJourney(SequentialTaskSet):
    """Customer adds items -> Tries a delisted product -> Summary -> Count.

    The unknown product must be rejected with product_not_found and leave the
    cart untouched.
    """

    def on_start(self):
        self.state = ShopperState(customer_id=customer_id())
        self.headers = customer_headers(self.state.customer_id)

    @task
    def add_items(self):
        for _ in range(random.randint(1, 4)):
            self.client.post(
                "/cart/items",
                json=add_item_data(),
                headers=self.headers,
                name="POST /cart/items [customer]",
            )

    @task
    def add_unknown_product(self):
        with self.client.post(
            "/cart/items",
            json=add_item_data(unknown_product_id()),
            headers=self.headers,
            catch_response=True,
            name="POST /cart/items [unknown]",
        ) as resp:
            if resp.status_code == 404 and error_code(resp) == "product_not_found":
                resp.success()
            else:
                resp.failure(f"Expected product_not_found, got {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def view_summary(self):
        self.client.get("/cart/summary", headers=self.headers, name="GET /cart/summary [customer]")

    @task
    def view_count(self):
        self.client.get("/cart/count", headers=self.headers, name="GET /cart/count [customer]")

    @task
    def done(self):
        self.interrupt()

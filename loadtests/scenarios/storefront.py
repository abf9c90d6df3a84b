"""Storefront load test scenarios.

Stateful SequentialTaskSet journeys covering cart browsing, checkout from a
cart, order cancellation and order fulfillment.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    cart_item_data,
    customer_headers,
    customer_id,
    order_data,
    product_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CartState, CatalogueState, OrderState


class _CatalogueMixin:
    """Creates the products a journey shops from."""

    def add_products(self, count=2):
        self.catalogue = CatalogueState()
        self.prices = {}
        for _ in range(count):
            payload = product_data()
            with self.client.post(
                "/products",
                json=payload,
                catch_response=True,
                name="POST /products",
            ) as resp:
                if resp.status_code == 201:
                    product_id = resp.json()["data"]["id"]
                    self.catalogue.product_ids.append(product_id)
                    self.prices[product_id] = payload["price"]
                else:
                    resp.failure(f"Add product failed: {resp.status_code} — {extract_error_detail(resp)}")
                    self.interrupt()


class BrowsingJourney(_CatalogueMixin, SequentialTaskSet):
    """Create Cart -> Add Items -> Update Quantity -> Remove Product -> View.

    Models a browsing customer who adds items, changes their mind and
    leaves without checking out.
    """

    def on_start(self):
        self.add_products()
        self.state = CartState(customer_id=customer_id())

    @task
    def create_cart(self):
        with self.client.post(
            "/carts",
            json={"customer_id": self.state.customer_id},
            catch_response=True,
            name="POST /carts",
        ) as resp:
            if resp.status_code == 201:
                self.state.cart_id = resp.json()["data"]["id"]
            else:
                resp.failure(f"Create cart failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_items(self):
        for product_id in self.catalogue.product_ids:
            payload = cart_item_data(product_id)
            with self.client.post(
                f"/carts/{self.state.cart_id}",
                json=payload,
                catch_response=True,
                name="POST /carts/{id}",
            ) as resp:
                if resp.status_code == 200:
                    self.state.lines.append(payload)
                    self.state.item_count += payload["quantity"]
                else:
                    resp.failure(f"Add cart item failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def update_quantity(self):
        if not self.state.lines:
            return
        line = self.state.lines[0]
        with self.client.put(
            f"/carts/{self.state.cart_id}",
            json={**line, "quantity": line["quantity"] + 1},
            catch_response=True,
            name="PUT /carts/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update quantity failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def remove_product(self):
        if not self.state.lines:
            return
        line = self.state.lines.pop()
        with self.client.request(
            "DELETE",
            f"/carts/{self.state.cart_id}",
            json={"product_id": line["product_id"]},
            catch_response=True,
            name="DELETE /carts/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Remove product failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def view_cart(self):
        with self.client.get(
            f"/carts/{self.state.cart_id}",
            catch_response=True,
            name="GET /carts/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CheckoutJourney(_CatalogueMixin, SequentialTaskSet):
    """Create Cart -> Add Items -> Place Order -> Clear Cart -> List Orders -> Stats.

    The happy path: the cart's merged lines become an order and the client
    empties the cart afterwards.
    """

    def on_start(self):
        self.add_products()
        self.state = CartState(customer_id=customer_id())
        self.order = OrderState(customer_id=self.state.customer_id)

    @task
    def create_cart(self):
        with self.client.post(
            "/carts",
            json={"customer_id": self.state.customer_id},
            catch_response=True,
            name="POST /carts",
        ) as resp:
            if resp.status_code == 201:
                self.state.cart_id = resp.json()["data"]["id"]
            else:
                resp.failure(f"Create cart failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def fill_cart(self):
        for product_id in self.catalogue.product_ids:
            with self.client.post(
                f"/carts/{self.state.cart_id}",
                json=cart_item_data(product_id),
                catch_response=True,
                name="POST /carts/{id}",
            ) as resp:
                if resp.status_code == 200:
                    self.state.lines = resp.json()["data"]["lines"]
                else:
                    resp.failure(f"Add cart item failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def place_order(self):
        if not self.state.lines:
            self.interrupt()
        with self.client.post(
            "/orders/create",
            json=order_data(self.state.lines, self.prices),
            headers=customer_headers(self.state.customer_id),
            catch_response=True,
            name="POST /orders/create",
        ) as resp:
            if resp.status_code == 201:
                data = resp.json()["data"]
                self.order.order_id = data["id"]
                self.order.total_amount = data["total_amount"]
            else:
                resp.failure(f"Create order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def clear_cart(self):
        with self.client.delete(
            f"/carts/{self.state.cart_id}/items",
            catch_response=True,
            name="DELETE /carts/{id}/items",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Clear cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def list_orders(self):
        with self.client.get(
            "/orders/user",
            headers=customer_headers(self.state.customer_id),
            catch_response=True,
            name="GET /orders/user",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def order_stats(self):
        with self.client.get(
            "/orders/user/stats",
            headers=customer_headers(self.state.customer_id),
            catch_response=True,
            name="GET /orders/user/stats",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Order stats failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class _DirectOrderJourney(_CatalogueMixin, SequentialTaskSet):
    """Places one order straight from the catalogue, skipping the cart."""

    def on_start(self):
        self.add_products(count=1)
        self.order = OrderState(customer_id=customer_id())
        lines = [cart_item_data(product_id, quantity=1) for product_id in self.catalogue.product_ids]
        with self.client.post(
            "/orders/create",
            json=order_data(lines, self.prices),
            headers=customer_headers(self.order.customer_id),
            catch_response=True,
            name="POST /orders/create",
        ) as resp:
            if resp.status_code == 201:
                self.order.order_id = resp.json()["data"]["id"]
            else:
                resp.failure(f"Create order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()


class CancellationJourney(_DirectOrderJourney):
    """Place Order -> View Order -> Cancel -> Cancel Again (rejected)."""

    @task
    def view_order(self):
        with self.client.get(
            f"/orders/{self.order.order_id}",
            headers=customer_headers(self.order.customer_id),
            catch_response=True,
            name="GET /orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View order failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def cancel_order(self):
        with self.client.delete(
            f"/orders/{self.order.order_id}",
            headers=customer_headers(self.order.customer_id),
            catch_response=True,
            name="DELETE /orders/{id}",
        ) as resp:
            if resp.status_code == 200:
                self.order.current_status = "cancelled"
            else:
                resp.failure(f"Cancel order failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def cancel_again(self):
        with self.client.delete(
            f"/orders/{self.order.order_id}",
            headers=customer_headers(self.order.customer_id),
            catch_response=True,
            name="DELETE /orders/{id} (repeat)",
        ) as resp:
            # A cancelled order is terminal
            if resp.status_code == 400:
                resp.success()
            else:
                resp.failure(f"Repeat cancel not rejected: {resp.status_code}")

    @task
    def done(self):
        self.interrupt()


class FulfillmentJourney(_DirectOrderJourney):
    """Place Order -> Processing -> Shipped -> Delivered."""

    def _advance(self, step):
        with self.client.put(
            f"/orders/{self.order.order_id}/{step}",
            catch_response=True,
            name=f"PUT /orders/{{id}}/{step}",
        ) as resp:
            if resp.status_code == 200:
                self.order.current_status = step
            else:
                resp.failure(f"Mark {step} failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def mark_processing(self):
        self._advance("processing")

    @task
    def mark_shipped(self):
        self._advance("shipped")

    @task
    def mark_delivered(self):
        self._advance("delivered")

    @task
    def done(self):
        self.interrupt()


class StorefrontUser(HttpUser):
    """Locust user simulating Storefront interactions.

    Weighted distribution:
    - 35% Browsing (cart edits, no checkout)
    - 35% Checkout from cart
    - 15% Order cancellation
    - 15% Order fulfillment
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        BrowsingJourney: 7,
        CheckoutJourney: 7,
        CancellationJourney: 3,
        FulfillmentJourney: 3,
    }


class BrowsingUser(HttpUser):
    """Cart traffic only, for isolating stock-check latency."""

    wait_time = between(0.2, 1.0)
    tasks = [BrowsingJourney]

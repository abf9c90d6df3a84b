"""Integration tests for Cart API endpoints via TestClient."""

import pytest


@pytest.fixture()
def cart_id(client):
    response = client.post("/carts", json={"customer_id": "cust-api-001"})
    assert response.status_code == 201
    return response.json()["data"]["id"]


class TestCreateCartAPI:
    def test_create_cart(self, client):
        response = client.post("/carts", json={"customer_id": "cust-api-001"})
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["customer_id"] == "cust-api-001"
        assert body["data"]["items"] == []

    def test_create_cart_twice_returns_the_same_cart(self, client):
        first = client.post("/carts", json={"customer_id": "cust-api-twice"})
        second = client.post("/carts", json={"customer_id": "cust-api-twice"})

        assert second.status_code == 201
        assert second.json()["data"]["id"] == first.json()["data"]["id"]


class TestAddToCartAPI:
    def test_add_item(self, client, cart_id, create_product):
        product_id = create_product()
        response = client.post(f"/carts/{cart_id}", json={"product_id": product_id, "selected_size": "m", "quantity": 2})
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Item added to cart"
        assert body["data"]["items"][0]["product"]["title"] == "Casual Cotton T-Shirt"
        assert body["data"]["items"][0]["quantity"] == 2

    def test_add_beyond_stock(self, client, cart_id, create_product):
        product_id = create_product(sizes={"m": 3})
        response = client.post(f"/carts/{cart_id}", json={"product_id": product_id, "selected_size": "m", "quantity": 4})
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "Insufficient stock" in body["message"]

    def test_unknown_size(self, client, cart_id, create_product):
        product_id = create_product()
        response = client.post(f"/carts/{cart_id}", json={"product_id": product_id, "selected_size": "xxl"})
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_unknown_product(self, client, cart_id):
        response = client.post(f"/carts/{cart_id}", json={"product_id": "prod-missing", "selected_size": "m"})
        assert response.status_code == 404

    def test_unknown_cart(self, client, create_product):
        product_id = create_product()
        response = client.post("/carts/cart-missing", json={"product_id": product_id, "selected_size": "m"})
        assert response.status_code == 404


class TestUpdateCartAPI:
    def test_update_quantity_up_to_stock(self, client, cart_id, create_product):
        product_id = create_product(sizes={"m": 3})
        client.post(f"/carts/{cart_id}", json={"product_id": product_id, "selected_size": "m", "quantity": 1})

        too_many = client.put(f"/carts/{cart_id}", json={"product_id": product_id, "selected_size": "m", "quantity": 5})
        assert too_many.status_code == 400

        exact = client.put(f"/carts/{cart_id}", json={"product_id": product_id, "selected_size": "m", "quantity": 3})
        assert exact.status_code == 200
        assert exact.json()["data"]["lines"][0]["quantity"] == 3

    def test_update_to_zero(self, client, cart_id, create_product):
        product_id = create_product()
        client.post(f"/carts/{cart_id}", json={"product_id": product_id, "selected_size": "m"})
        response = client.put(f"/carts/{cart_id}", json={"product_id": product_id, "selected_size": "m", "quantity": 0})
        assert response.status_code == 400

    def test_update_product_not_in_cart(self, client, cart_id, create_product):
        product_id = create_product()
        response = client.put(f"/carts/{cart_id}", json={"product_id": product_id, "selected_size": "m", "quantity": 1})
        assert response.status_code == 404
        assert response.json()["message"] == "Product not found in cart"


class TestRemoveFromCartAPI:
    def test_remove_product(self, client, cart_id, create_product):
        product_id = create_product()
        client.post(f"/carts/{cart_id}", json={"product_id": product_id, "selected_size": "m"})
        client.post(f"/carts/{cart_id}", json={"product_id": product_id, "selected_size": "l"})

        response = client.request("DELETE", f"/carts/{cart_id}", json={"product_id": product_id})

        assert response.status_code == 200
        assert response.json()["data"]["items"] == []

    def test_remove_absent_product(self, client, cart_id):
        response = client.request("DELETE", f"/carts/{cart_id}", json={"product_id": "prod-never-added"})
        assert response.status_code == 200

    def test_clear_cart(self, client, cart_id, create_product):
        product_id = create_product()
        client.post(f"/carts/{cart_id}", json={"product_id": product_id, "selected_size": "m"})
        response = client.delete(f"/carts/{cart_id}/items")
        assert response.status_code == 200
        assert response.json()["data"]["summary"]["item_count"] == 0


class TestReadCartAPI:
    def test_read_cart_with_summary(self, client, cart_id, create_product):
        product_id = create_product(price=10.00)
        client.post(f"/carts/{cart_id}", json={"product_id": product_id, "selected_size": "l", "quantity": 2})

        response = client.get(f"/carts/{cart_id}")

        assert response.status_code == 200
        summary = response.json()["data"]["summary"]
        assert summary["subtotal"] == 20.0
        assert summary["vat"] == 4.2

    def test_unknown_cart(self, client):
        response = client.get("/carts/cart-missing")
        assert response.status_code == 404

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import cart_router, order_router, product_router, register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def create_product(client):
    def _create(title="Casual Cotton T-Shirt", price=19.99, sizes=None):
        response = client.post(
            "/products",
            json={
                "title": title,
                "price": price,
                "category": "Men",
                "image": "https://example.com/img/tshirt.jpg",
                "sizes": sizes if sizes is not None else {"s": 5, "m": 3, "l": 10},
            },
        )
        assert response.status_code == 201
        return response.json()["data"]["id"]

    return _create

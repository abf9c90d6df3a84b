"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
and match the exact field names expected by the API's Pydantic request
schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

SIZES = ["xs", "s", "m", "l", "xl"]
CATEGORIES = ["Women", "Men", "Unisex", "Kids"]


def customer_id() -> str:
    """Generate unique customer ids like 'cust-lt-a1b2c3d4'."""
    return f"cust-lt-{uuid.uuid4().hex[:8]}"


def customer_headers(customer: str) -> dict:
    """Headers the upstream auth layer would set for an authenticated customer."""
    return {"X-Customer-Id": customer}


# ---------- Catalogue ----------


def product_data() -> dict:
    """Generate AddProductRequest payload with plenty of stock in every size."""
    word = fake.word().capitalize()
    garment = random.choice(["Jacket", "T-Shirt", "Hoodie", "Jeans", "Sweater"])
    return {
        "title": f"{word} {garment}"[:255],
        "price": round(random.uniform(9.99, 149.99), 2),
        "category": random.choice(CATEGORIES),
        "image": fake.image_url(),
        "description": fake.sentence(nb_words=12),
        "sizes": {size: random.randint(500, 1000) for size in SIZES},
    }


# ---------- Cart ----------


def cart_item_data(product_id: str, quantity: int | None = None) -> dict:
    """Generate AddToCartRequest payload for a known product."""
    return {
        "product_id": product_id,
        "selected_size": random.choice(SIZES),
        "quantity": quantity or random.randint(1, 3),
    }


# ---------- Orders ----------


def shipping_address() -> str:
    return fake.address().replace("\n", ", ")


def valid_phone() -> str:
    return fake.phone_number()[:50]


def order_data(lines: list[dict], prices: dict[str, float] | None = None) -> dict:
    """Generate CreateOrderRequest payload from cart lines."""
    prices = prices or {}
    return {
        "address": shipping_address(),
        "phone": valid_phone(),
        "items": [
            {
                "product_id": line["product_id"],
                "selected_size": line["selected_size"],
                "quantity": line["quantity"],
                "price": prices.get(line["product_id"]),
            }
            for line in lines
        ],
    }

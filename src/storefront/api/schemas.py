"""Pydantic request schemas for the Storefront API.

These are external contracts (anti-corruption layer), separate from the
internal Protean commands they are translated into.
"""

from pydantic import BaseModel, Field

from storefront.catalogue.stock import Size


# ---------------------------------------------------------------------------
# Product Request Schemas
# ---------------------------------------------------------------------------
class AddProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Casual Cotton T-Shirt",
                    "price": 19.99,
                    "category": "Men",
                    "image": "https://example.com/img/tshirt.jpg",
                    "sizes": {"xs": 6, "s": 12, "m": 20, "l": 15, "xl": 8},
                }
            ]
        }
    }

    title: str = Field(..., max_length=255)
    price: float = Field(..., gt=0)
    category: str | None = Field(None, max_length=100)
    image: str | None = Field(None, max_length=500)
    description: str | None = None
    sizes: dict[Size, int] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class CreateCartRequest(BaseModel):
    customer_id: str


class AddToCartRequest(BaseModel):
    product_id: str
    selected_size: Size
    quantity: int = Field(ge=1, default=1)


class UpdateCartQuantityRequest(BaseModel):
    product_id: str
    selected_size: Size
    # Lower bound is enforced by the cart so the caller gets a domain error
    quantity: int


class RemoveFromCartRequest(BaseModel):
    product_id: str


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class OrderItemSchema(BaseModel):
    product_id: str
    selected_size: Size
    quantity: int = Field(ge=1)
    price: float | None = Field(None, ge=0)


class CreateOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address": "Calle Mayor 1, 28013 Madrid",
                    "phone": "+34 600 000 000",
                    "items": [
                        {"product_id": "prod-001", "selected_size": "m", "quantity": 2, "price": 19.99},
                    ],
                }
            ]
        }
    }

    address: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1, max_length=50)
    items: list[OrderItemSchema]


class CancelOrderRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)

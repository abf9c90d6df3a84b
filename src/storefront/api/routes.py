"""FastAPI routes for the Storefront — products, carts and orders."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.auth import require_caller
from storefront.api.errors import envelope
from storefront.api.schemas import (
    AddProductRequest,
    AddToCartRequest,
    CancelOrderRequest,
    CreateCartRequest,
    CreateOrderRequest,
    RemoveFromCartRequest,
    UpdateCartQuantityRequest,
)
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from storefront.cart.management import ClearCart, CreateCart
from storefront.cart.queries import get_cart
from storefront.catalogue.management import AddProduct
from storefront.catalogue.queries import get_product
from storefront.order.cancellation import CancelOrder
from storefront.order.creation import CreateOrder
from storefront.order.fulfillment import MarkDelivered, MarkProcessing, MarkShipped
from storefront.order.order import Order
from storefront.order.queries import get_customer_order_stats, get_customer_orders, get_order, order_payload
from storefront.shared.caller import Caller

# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201)
async def add_product(body: AddProductRequest) -> dict:
    command = AddProduct(
        title=body.title,
        price=body.price,
        category=body.category,
        image=body.image,
        description=body.description,
        sizes=json.dumps({size.value: quantity for size, quantity in body.sizes.items()}),
    )
    product_id = current_domain.process(command, asynchronous=False)
    return envelope("Product added", get_product(product_id))


@product_router.get("/{product_id}")
async def read_product(product_id: str) -> dict:
    return envelope("Product retrieved", get_product(product_id))


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.post("", status_code=201)
async def create_cart(body: CreateCartRequest) -> dict:
    cart_id = current_domain.process(CreateCart(customer_id=body.customer_id), asynchronous=False)
    return envelope("Cart created", get_cart(cart_id))


@cart_router.get("/{cart_id}")
async def read_cart(cart_id: str) -> dict:
    return envelope("Cart retrieved", get_cart(cart_id))


@cart_router.post("/{cart_id}")
async def add_to_cart(cart_id: str, body: AddToCartRequest) -> dict:
    command = AddToCart(
        cart_id=cart_id,
        product_id=body.product_id,
        selected_size=body.selected_size.value,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return envelope("Item added to cart", get_cart(cart_id))


@cart_router.put("/{cart_id}")
async def update_cart_quantity(cart_id: str, body: UpdateCartQuantityRequest) -> dict:
    command = UpdateCartQuantity(
        cart_id=cart_id,
        product_id=body.product_id,
        selected_size=body.selected_size.value,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return envelope("Cart updated", get_cart(cart_id))


@cart_router.delete("/{cart_id}")
async def remove_from_cart(cart_id: str, body: RemoveFromCartRequest) -> dict:
    command = RemoveFromCart(cart_id=cart_id, product_id=body.product_id)
    current_domain.process(command, asynchronous=False)
    return envelope("Item removed from cart", get_cart(cart_id))


@cart_router.delete("/{cart_id}/items")
async def clear_cart(cart_id: str) -> dict:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return envelope("Cart cleared", get_cart(cart_id))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("/create", status_code=201)
async def create_order(body: CreateOrderRequest, caller: Caller = Depends(require_caller)) -> dict:
    command = CreateOrder(
        customer_id=caller.customer_id,
        address=body.address,
        phone=body.phone,
        items=json.dumps(
            [
                {
                    "product_id": item.product_id,
                    "selected_size": item.selected_size.value,
                    "quantity": item.quantity,
                    "price": item.price,
                }
                for item in body.items
            ]
        ),
    )
    order_id = current_domain.process(command, asynchronous=False)
    return envelope("Order created successfully", get_order(order_id, caller))


@order_router.get("/user")
async def list_customer_orders(caller: Caller = Depends(require_caller)) -> dict:
    return envelope("Orders retrieved", get_customer_orders(caller))


@order_router.get("/user/stats")
async def customer_order_stats(caller: Caller = Depends(require_caller)) -> dict:
    return envelope("Order statistics retrieved", get_customer_order_stats(caller))


@order_router.get("/{order_id}")
async def read_order(order_id: str, caller: Caller = Depends(require_caller)) -> dict:
    return envelope("Order retrieved", get_order(order_id, caller))


@order_router.delete("/{order_id}")
async def cancel_order(
    order_id: str,
    body: CancelOrderRequest | None = None,
    caller: Caller = Depends(require_caller),
) -> dict:
    command = CancelOrder(
        order_id=order_id,
        customer_id=caller.customer_id,
        reason=body.reason if body else None,
    )
    current_domain.process(command, asynchronous=False)
    return envelope("Order cancelled successfully", get_order(order_id, caller))


# --- Fulfillment endpoints ---


def _order_status(order_id: str) -> dict:
    return order_payload(current_domain.repository_for(Order).get(order_id))


@order_router.put("/{order_id}/processing")
async def mark_processing(order_id: str) -> dict:
    current_domain.process(MarkProcessing(order_id=order_id), asynchronous=False)
    return envelope("Order is being processed", _order_status(order_id))


@order_router.put("/{order_id}/shipped")
async def mark_shipped(order_id: str) -> dict:
    current_domain.process(MarkShipped(order_id=order_id), asynchronous=False)
    return envelope("Order shipped", _order_status(order_id))


@order_router.put("/{order_id}/delivered")
async def mark_delivered(order_id: str) -> dict:
    current_domain.process(MarkDelivered(order_id=order_id), asynchronous=False)
    return envelope("Order delivered", _order_status(order_id))

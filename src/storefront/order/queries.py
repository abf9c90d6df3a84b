"""Read side of orders, always scoped to the calling customer."""

from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.cart.queries import product_display
from storefront.order.order import Order, OrderStatus
from storefront.shared.caller import Caller
from storefront.shared.money import round_money, to_decimal

RECENT_ORDERS_LIMIT = 5


def _isoformat(value):
    return value.isoformat() if value else None


def order_payload(order: Order, products=None) -> dict:
    """Serialize an order with current product display data and its owner."""
    products = {} if products is None else products
    return {
        "id": str(order.id),
        "owner": {"id": str(order.customer_id)},
        "items": [
            {
                "id": str(item.id),
                "product": product_display(item.product_id, products),
                "selected_size": item.selected_size,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "line_total": item.line_total,
            }
            for item in order.items
        ],
        "address": order.address,
        "phone": order.phone,
        "total_amount": order.total_amount,
        "status": order.status,
        "created_at": _isoformat(order.created_at),
        "updated_at": _isoformat(order.updated_at),
        "cancelled_at": _isoformat(order.cancelled_at),
    }


def get_customer_orders(caller: Caller) -> list[dict]:
    orders = current_domain.repository_for(Order).for_customer(caller.customer_id)
    products = {}
    return [order_payload(order, products) for order in orders]


def get_order(order_id, caller: Caller) -> dict:
    order = current_domain.repository_for(Order).get_for_customer(order_id, caller.customer_id)
    return order_payload(order)


def get_customer_order_stats(caller: Caller) -> dict:
    orders = current_domain.repository_for(Order).for_customer(caller.customer_id)
    placed = [order for order in orders if order.status != OrderStatus.CANCELLED.value]
    total_spent = round_money(sum((to_decimal(order.total_amount) for order in placed), to_decimal(0)))

    cart = current_domain.repository_for(ShoppingCart).find_for_customer(caller.customer_id)

    products = {}
    return {
        "order_count": len(orders),
        "total_spent": float(total_spent),
        "cart_count": len(cart.items) if cart else 0,
        "recent_orders": [order_payload(order, products) for order in orders[:RECENT_ORDERS_LIMIT]],
    }

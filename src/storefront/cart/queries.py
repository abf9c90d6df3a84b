"""Read side of the cart: lines joined with current catalogue data."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.product import Product
from storefront.shared.money import VAT_RATE, line_total, round_money, sum_lines, vat_for


def product_display(product_id, cache=None):
    """Display fields for a product, or None when it left the catalogue."""
    cache = {} if cache is None else cache
    key = str(product_id)
    if key not in cache:
        try:
            cache[key] = current_domain.repository_for(Product).get(key).display_fields()
        except ObjectNotFoundError:
            cache[key] = None
    return cache[key]


def cart_payload(cart: ShoppingCart) -> dict:
    """Serialize a cart with product details, merged lines and a price summary."""
    products = {}

    items = [
        {
            "id": str(item.id),
            "product": product_display(item.product_id, products),
            "selected_size": item.selected_size,
            "quantity": item.quantity,
            "added_at": item.added_at.isoformat() if item.added_at else None,
        }
        for item in cart.items
    ]

    lines = []
    for line in cart.merged_lines():
        product = product_display(line["product_id"], products)
        price = product["price"] if product else 0
        lines.append({**line, "product": product, "line_total": float(line_total(price, line["quantity"]))})

    subtotal = sum_lines((line["product"]["price"], line["quantity"]) for line in lines if line["product"])
    vat = vat_for(subtotal)

    return {
        "id": str(cart.id),
        "customer_id": str(cart.customer_id),
        "items": items,
        "lines": lines,
        "summary": {
            "item_count": cart.item_count,
            "subtotal": float(subtotal),
            "vat_rate": float(VAT_RATE),
            "vat": float(vat),
            "total": float(round_money(subtotal + vat)),
        },
        "updated_at": cart.updated_at.isoformat() if cart.updated_at else None,
    }


def get_cart(cart_id) -> dict:
    cart = current_domain.repository_for(ShoppingCart).get(cart_id)
    return cart_payload(cart)


def get_customer_cart(customer_id) -> dict:
    cart = current_domain.repository_for(ShoppingCart).for_customer(customer_id)
    return cart_payload(cart)

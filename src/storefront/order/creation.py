"""Order creation — command and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.order.order import Order
from storefront.shared.money import round_money, to_decimal

_REQUIRED_ITEM_KEYS = ("product_id", "selected_size", "quantity")


@storefront.command(part_of="Order")
class CreateOrder:
    customer_id = Identifier(required=True)
    address = Text(required=True)
    phone = String(required=True, max_length=50)
    items = Text(required=True)  # JSON: list of {product_id, selected_size, quantity, price}


@storefront.command_handler(part_of=Order)
class CreateOrderHandler:
    @handle(CreateOrder)
    def create_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        if not items_data:
            raise ValidationError({"items": ["No items provided for order"]})

        product_repo = current_domain.repository_for(Product)
        products = {}
        lines = []
        for position, item in enumerate(items_data):
            missing = [key for key in _REQUIRED_ITEM_KEYS if not isinstance(item, dict) or item.get(key) is None]
            if missing:
                raise ValidationError({"items": [f"Item {position} is missing {', '.join(missing)}"]})

            product_id = str(item["product_id"])
            if product_id not in products:
                products[product_id] = product_repo.get(product_id)
            product = products[product_id]

            submitted = item.get("price")
            if submitted is not None and round_money(to_decimal(submitted)) != round_money(to_decimal(product.price)):
                logger.warning(
                    "order_price_mismatch",
                    customer_id=str(command.customer_id),
                    product_id=product_id,
                    submitted_price=submitted,
                    catalogue_price=product.price,
                )

            lines.append(
                {
                    "product_id": product_id,
                    "selected_size": item["selected_size"],
                    "quantity": item["quantity"],
                    "unit_price": product.price,
                }
            )

        order = Order.create(
            customer_id=command.customer_id,
            address=command.address,
            phone=command.phone,
            lines=lines,
        )

        # Stock leaves the shelf with the order; any shortfall aborts the whole order
        for line in lines:
            products[line["product_id"]].decrement_stock(line["selected_size"], line["quantity"], order_id=order.id)

        for product in products.values():
            product_repo.add(product)
        current_domain.repository_for(Order).add(order)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            total_amount=order.total_amount,
            lines=len(lines),
        )
        return str(order.id)

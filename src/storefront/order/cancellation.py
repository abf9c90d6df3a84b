"""Order cancellation — command and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import logger, storefront
from storefront.order.order import Order


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    reason = String(max_length=500)


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get_for_customer(command.order_id, command.customer_id)
        order.cancel(reason=command.reason)

        product_repo = current_domain.repository_for(Product)
        products = {}
        for item in order.items:
            product_id = str(item.product_id)
            if product_id not in products:
                products[product_id] = product_repo.get(product_id)
            products[product_id].restore_stock(item.selected_size, item.quantity, order_id=order.id)

        for product in products.values():
            product_repo.add(product)
        repo.add(order)

        logger.info("order_cancelled", order_id=str(order.id), customer_id=str(order.customer_id))

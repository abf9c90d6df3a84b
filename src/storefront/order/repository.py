"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_customer(self, customer_id) -> list[Order]:
        """Every order placed by ``customer_id``, newest first."""
        return (
            self._dao.query.filter(customer_id=str(customer_id)).order_by("-created_at").limit(None).all().items
        )

    def get_for_customer(self, order_id, customer_id) -> Order:
        """Fetch an order only if ``customer_id`` owns it.

        A missing order and somebody else's order are indistinguishable to
        the caller.
        """
        try:
            order = self.get(order_id)
        except ObjectNotFoundError:
            order = None

        if order is None or str(order.customer_id) != str(customer_id):
            raise ObjectNotFoundError({"order": ["Order not found or unauthorized"]})
        return order

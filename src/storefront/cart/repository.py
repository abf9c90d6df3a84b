"""Repository for the ShoppingCart aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront


@storefront.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def find_for_customer(self, customer_id) -> ShoppingCart | None:
        """The cart owned by ``customer_id``, or None if they have none yet."""
        carts = self._dao.query.filter(customer_id=str(customer_id)).limit(1).all().items
        return carts[0] if carts else None

    def for_customer(self, customer_id) -> ShoppingCart:
        cart = self.find_for_customer(customer_id)
        if cart is None:
            raise ObjectNotFoundError({"cart": [f"No cart for customer {customer_id}"]})
        return cart

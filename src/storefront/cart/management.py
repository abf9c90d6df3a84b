"""Cart management — creating and emptying carts."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront


@storefront.command(part_of="ShoppingCart")
class CreateCart:
    """Open the cart a customer keeps for the lifetime of their account."""

    customer_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    """Remove every line, e.g. once the cart's contents became an order."""

    cart_id = Identifier(required=True)


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(CreateCart)
    def create_cart(self, command):
        """Return the customer's cart, opening one only if they have none."""
        repo = current_domain.repository_for(ShoppingCart)
        existing = repo.find_for_customer(command.customer_id)
        if existing is not None:
            return str(existing.id)

        cart = ShoppingCart.create(customer_id=command.customer_id)
        repo.add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)

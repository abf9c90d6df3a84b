"""Shopping cart aggregate — a customer's pending selection of product lines.

Lines are appended on every add and merged by product and size only when the
cart is read. Each add or quantity change is checked against the product's
current stock for the selected size; stock itself is never touched here.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.catalogue.stock import Size
from storefront.domain import storefront


@storefront.entity(part_of="ShoppingCart", limit=None)
class CartItem:
    product_id = Identifier(required=True)
    selected_size = String(required=True, choices=Size)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def lines_for(self, product_id, selected_size=None):
        return [
            item
            for item in self.items
            if str(item.product_id) == str(product_id)
            and (selected_size is None or item.selected_size == selected_size)
        ]

    def add_item(self, product, selected_size, quantity=1):
        """Append a line for ``product`` after checking its stock for the size."""
        product.ensure_available(selected_size, quantity)

        now = datetime.now(UTC)
        item = CartItem(
            product_id=str(product.id),
            selected_size=selected_size,
            quantity=quantity,
            added_at=now,
        )
        self.add_items(item)
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product.id),
                selected_size=selected_size,
                quantity=quantity,
            )
        )

    def update_item_quantity(self, product, selected_size, quantity):
        """Set the quantity held for a product and size.

        Lines appended separately for the same product and size collapse into
        one, so the merged cart shows exactly ``quantity``.
        """
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        matching = self.lines_for(product.id, selected_size)
        if not matching:
            raise ObjectNotFoundError({"product_id": ["Product not found in cart"]})

        product.ensure_available(selected_size, quantity)

        line, *duplicates = matching
        previous_quantity = sum(item.quantity for item in matching)
        line.quantity = quantity
        for duplicate in duplicates:
            self.remove_items(duplicate)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product.id),
                selected_size=selected_size,
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_product(self, product_id):
        """Drop every line for ``product_id``. Removing an absent product is a no-op."""
        matching = self.lines_for(product_id)
        if not matching:
            return

        for item in matching:
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
                lines_removed=len(matching),
            )
        )

    def clear(self):
        lines = list(self.items)
        for item in lines:
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(CartCleared(cart_id=str(self.id), lines_removed=len(lines)))

    # -------------------------------------------------------------------
    # Read helpers
    # -------------------------------------------------------------------
    def merged_lines(self):
        """Lines merged by product and size, in the order first added."""
        merged = {}
        for item in self.items:
            key = (str(item.product_id), item.selected_size)
            if key in merged:
                merged[key]["quantity"] += item.quantity
            else:
                merged[key] = {
                    "product_id": key[0],
                    "selected_size": item.selected_size,
                    "quantity": item.quantity,
                }
        return list(merged.values())

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)

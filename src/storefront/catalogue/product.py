"""Product aggregate with its per-size stock map.

Cart operations only read a product. Stock moves when an order is placed
(decrement) or cancelled (restore).
"""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, Float, Integer, String, Text, ValueObject

from storefront.catalogue.events import ProductAdded, StockDecremented, StockRestored
from storefront.catalogue.stock import SIZES, ensure_in_stock
from storefront.domain import storefront


@storefront.value_object(part_of="Product")
class SizeStock:
    """Units on hand for each size. Never negative."""

    xs = Integer(default=0, min_value=0)
    s = Integer(default=0, min_value=0)
    m = Integer(default=0, min_value=0)
    l = Integer(default=0, min_value=0)  # noqa: E741
    xl = Integer(default=0, min_value=0)

    @classmethod
    def from_map(cls, stock):
        stock = stock or {}
        return cls(**{size: int(stock.get(size) or 0) for size in SIZES})

    def as_map(self):
        return {size: getattr(self, size) or 0 for size in SIZES}

    def adjusted(self, size, delta):
        """Return a copy with ``delta`` units added to ``size``."""
        stock = self.as_map()
        stock[size] = stock[size] + delta
        return SizeStock.from_map(stock)


@storefront.aggregate
class Product:
    title = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.01)
    category = String(max_length=100)
    image = String(max_length=500)
    sizes = ValueObject(SizeStock)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, title, price, category=None, image=None, description=None, sizes=None):
        now = datetime.now(UTC)
        product = cls(
            title=title,
            price=price,
            category=category,
            image=image,
            description=description,
            sizes=SizeStock.from_map(sizes),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                title=title,
                price=price,
                category=category,
                sizes=json.dumps(product.stock_map()),
            )
        )
        return product

    def stock_map(self):
        return self.sizes.as_map() if self.sizes else {size: 0 for size in SIZES}

    def stock_for(self, size):
        return self.stock_map().get(size, 0)

    def ensure_available(self, size, quantity):
        ensure_in_stock(self.stock_map(), size, quantity)

    def decrement_stock(self, size, quantity, order_id=None):
        """Take ``quantity`` units of ``size`` for an order."""
        self.ensure_available(size, quantity)
        self.sizes = SizeStock.from_map(self.stock_map()).adjusted(size, -quantity)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockDecremented(
                product_id=str(self.id),
                selected_size=size,
                quantity=quantity,
                remaining=self.stock_for(size),
                order_id=str(order_id) if order_id else None,
            )
        )

    def restore_stock(self, size, quantity, order_id=None):
        """Give back units previously taken by an order."""
        self.sizes = SizeStock.from_map(self.stock_map()).adjusted(size, quantity)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockRestored(
                product_id=str(self.id),
                selected_size=size,
                quantity=quantity,
                remaining=self.stock_for(size),
                order_id=str(order_id) if order_id else None,
            )
        )

    def display_fields(self):
        """The product fields joined into cart and order views."""
        return {
            "id": str(self.id),
            "title": self.title,
            "price": self.price,
            "category": self.category,
            "image": self.image,
        }

"""Order aggregate — an immutable, priced snapshot of what a customer bought.

State Machine:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    PENDING → CANCELLED

The total is computed once from the line prices when the order is placed and
is never recalculated, even if catalogue prices change later.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.catalogue.stock import Size
from storefront.domain import storefront
from storefront.order.events import (
    OrderCancelled,
    OrderDelivered,
    OrderPlaced,
    OrderProcessing,
    OrderShipped,
)
from storefront.shared.money import line_total, sum_lines


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


@storefront.entity(part_of="Order", limit=None)
class OrderItem:
    """A purchased product, size and quantity at the unit price paid."""

    product_id = Identifier(required=True)
    selected_size = String(required=True, choices=Size)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)

    @property
    def line_total(self):
        return float(line_total(self.unit_price, self.quantity))

    def snapshot(self):
        return {
            "product_id": str(self.product_id),
            "selected_size": self.selected_size,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
        }


@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    items = HasMany(OrderItem)
    address = Text(required=True)
    phone = String(required=True, max_length=50)
    total_amount = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    created_at = DateTime()
    updated_at = DateTime()
    cancelled_at = DateTime()

    @invariant.post
    def cancelled_orders_record_when(self):
        if self.status == OrderStatus.CANCELLED.value and not self.cancelled_at:
            raise ValidationError({"cancelled_at": ["A cancelled order must record when it was cancelled"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, customer_id, address, phone, lines):
        """Place an order from priced lines.

        Args:
            customer_id: The customer placing the order.
            address: Free-text shipping address.
            phone: Contact phone number.
            lines: List of dicts with product_id, selected_size, quantity
                and unit_price.
        """
        if not lines:
            raise ValidationError({"items": ["No items provided for order"]})

        total_amount = sum_lines((line["unit_price"], line["quantity"]) for line in lines)
        now = datetime.now(UTC)

        order = cls(
            customer_id=customer_id,
            address=address,
            phone=phone,
            total_amount=float(total_amount),
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for line in lines:
            order.add_items(
                OrderItem(
                    product_id=str(line["product_id"]),
                    selected_size=line["selected_size"],
                    quantity=line["quantity"],
                    unit_price=line["unit_price"],
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                items=json.dumps([item.snapshot() for item in order.items]),
                total_amount=order.total_amount,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    @property
    def is_cancellable(self):
        return OrderStatus.CANCELLED in _VALID_TRANSITIONS[OrderStatus(self.status)]

    def mark_processing(self):
        self._assert_can_transition(OrderStatus.PROCESSING)
        now = datetime.now(UTC)
        self.status = OrderStatus.PROCESSING.value
        self.updated_at = now
        self.raise_(OrderProcessing(order_id=str(self.id), started_at=now))

    def mark_shipped(self):
        self._assert_can_transition(OrderStatus.SHIPPED)
        now = datetime.now(UTC)
        self.status = OrderStatus.SHIPPED.value
        self.updated_at = now
        self.raise_(OrderShipped(order_id=str(self.id), shipped_at=now))

    def mark_delivered(self):
        self._assert_can_transition(OrderStatus.DELIVERED)
        now = datetime.now(UTC)
        self.status = OrderStatus.DELIVERED.value
        self.updated_at = now
        self.raise_(OrderDelivered(order_id=str(self.id), delivered_at=now))

    def cancel(self, reason=None):
        self._assert_can_transition(OrderStatus.CANCELLED)
        now = datetime.now(UTC)

        with atomic_change(self):
            self.status = OrderStatus.CANCELLED.value
            self.cancelled_at = now
            self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                items=json.dumps([item.snapshot() for item in self.items]),
                total_amount=self.total_amount,
                cancelled_at=now,
                reason=reason,
            )
        )

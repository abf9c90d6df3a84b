"""Storefront bounded context — catalogue, shopping cart and orders.

Holds the cart-to-order pipeline: cart line management with size and stock
validation, order placement with frozen totals, and the order lifecycle
scoped to the owning customer.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)

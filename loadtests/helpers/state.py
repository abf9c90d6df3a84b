"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state with no cross-user sharing.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class CatalogueState:
    """Products created by this user, with the sizes they stock."""

    product_ids: list[str] = field(default_factory=list)
    sizes: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class CartState:
    """Tracks state for a shopping cart lifecycle."""

    customer_id: str | None = None
    cart_id: str | None = None
    lines: list[dict] = field(default_factory=list)
    item_count: int = 0


@dataclass
class OrderState:
    """Tracks state for a single order lifecycle."""

    order_id: str | None = None
    customer_id: str | None = None
    current_status: str = "pending"
    total_amount: float = 0.0

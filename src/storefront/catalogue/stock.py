"""Stock validation against a product's per-size stock map.

The same check guards adding to a cart, changing a cart quantity and placing
an order.
"""

from collections.abc import Mapping
from enum import Enum

from protean.exceptions import ValidationError


class Size(Enum):
    XS = "xs"
    S = "s"
    M = "m"
    L = "l"
    XL = "xl"


SIZES = tuple(size.value for size in Size)


class StockCheck(Enum):
    AVAILABLE = "Available"
    INSUFFICIENT = "Insufficient"


class InsufficientStockError(ValidationError):
    """Requested quantity exceeds what the catalogue holds for a size."""


def check_stock(stock: Mapping[str, int], size: str, quantity: int) -> StockCheck:
    """Compare a requested quantity with the stock held for ``size``.

    A size missing from ``stock`` counts as zero. A value that is not one of
    the known sizes is a validation error, not a stock shortage.
    """
    if size not in SIZES:
        raise ValidationError({"selected_size": [f"Unknown size '{size}'"]})
    if quantity is None or quantity < 1:
        raise ValidationError({"quantity": ["Quantity must be at least 1"]})

    available = stock.get(size) or 0
    if quantity > available:
        return StockCheck.INSUFFICIENT
    return StockCheck.AVAILABLE


def ensure_in_stock(stock: Mapping[str, int], size: str, quantity: int) -> None:
    if check_stock(stock, size, quantity) is StockCheck.INSUFFICIENT:
        available = stock.get(size) or 0
        raise InsufficientStockError(
            {"quantity": [f"Insufficient stock for size '{size}': {available} available, {quantity} requested"]}
        )

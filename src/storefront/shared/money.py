"""Decimal arithmetic for prices and order totals.

Amounts are stored as floats on aggregates; every sum is done on Decimals
built from the float's string form so totals never pick up binary drift.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")

# Flat VAT used for the checkout estimate shown with a cart
VAT_RATE = Decimal("0.21")


def to_decimal(amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def round_money(amount) -> Decimal:
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price, quantity: int) -> Decimal:
    return round_money(to_decimal(unit_price) * quantity)


def sum_lines(lines) -> Decimal:
    """Total of ``(unit_price, quantity)`` pairs, rounded to cents."""
    total = sum((to_decimal(price) * quantity for price, quantity in lines), Decimal("0"))
    return round_money(total)


def vat_for(amount) -> Decimal:
    return round_money(to_decimal(amount) * VAT_RATE)

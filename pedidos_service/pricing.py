"""
pricing.py — Order Total Calculation

Totals are computed with exact Decimal arithmetic and rounded once, at the
end, to two decimal places using ROUND_HALF_UP (2.005 -> 2.01).
"""

from decimal import MAX_PREC, ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable

from .models import PricedLine

CENTS = Decimal("0.01")


def round2(amount: Decimal) -> Decimal:
    # quantity has no upper bound, so the result may need more than 28 digits
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def line_subtotal(line: PricedLine) -> Decimal:
    # not rounded; only the order total is
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        return line.unit_price * line.quantity


def compute_total(lines: Iterable[PricedLine]) -> Decimal:
    """
    Returns round2(sum of quantity x unit_price) over all lines.

    The sum is exact at any magnitude, so the result does not depend on line order.
    """
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        return round2(sum((line_subtotal(line) for line in lines), Decimal("0")))

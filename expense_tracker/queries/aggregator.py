"""
Expense Aggregation

Pure functions over a snapshot of the collection. Nothing here reads
storage or keeps state; callers pass the records they are displaying.

Tie-break: when two categories share the greatest total, the one that
appears first in the collection wins.
"""

from decimal import ROUND_HALF_UP, Decimal, getcontext, localcontext
from typing import Iterable, Optional

from expense_tracker.models.expense import CategoryTotal, ExpenseRecord


TWO_PLACES = Decimal("0.01")


def total(records: Iterable[ExpenseRecord]) -> Decimal:
    """Sum of all amounts; zero for an empty collection."""
    return sum((r.amount for r in records), Decimal("0"))


def category_totals(records: Iterable[ExpenseRecord]) -> list[CategoryTotal]:
    """Per-category sums, in the order each category first appears."""
    sums: dict[str, Decimal] = {}
    for record in records:
        sums[record.category] = sums.get(record.category, Decimal("0")) + record.amount
    return [CategoryTotal(category=c, amount=a) for c, a in sums.items()]


def top_category(records: Iterable[ExpenseRecord]) -> Optional[CategoryTotal]:
    """
    Category with the greatest summed amount.

    Returns None for an empty collection.
    """
    best = None
    for entry in category_totals(records):
        # strict comparison keeps the first-seen category on ties
        if best is None or entry.amount > best.amount:
            best = entry
    return best


def format_amount(amount: Decimal) -> str:
    """Two-decimal display string, e.g. Decimal("25.5") -> "25.50"."""
    value = Decimal(amount)
    with localcontext() as ctx:
        # room for every integer digit plus the two decimals
        ctx.prec = max(getcontext().prec, value.adjusted() + 3)
        return str(value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))

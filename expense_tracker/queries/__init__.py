"""Aggregation package."""

from expense_tracker.queries.aggregator import (
    category_totals,
    format_amount,
    top_category,
    total,
)

__all__ = ["category_totals", "format_amount", "top_category", "total"]

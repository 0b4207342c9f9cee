"""Validation package."""

from expense_tracker.validation.validator import (
    ExpenseValidator,
    format_record_date,
    parse_amount,
)

__all__ = ["ExpenseValidator", "format_record_date", "parse_amount"]

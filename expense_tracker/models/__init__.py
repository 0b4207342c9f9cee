"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
"""

from expense_tracker.models.expense import (
    DATE_FORMAT,
    CategoryTotal,
    ExpenseCategory,
    ExpenseRecord,
    LoadResult,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "DATE_FORMAT",
    "CategoryTotal",
    "ExpenseCategory",
    "ExpenseRecord",
    "LoadResult",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

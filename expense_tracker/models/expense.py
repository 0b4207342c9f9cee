"""
Core Data Models for Expense Tracker

These models define the schemas for all data flowing through the system.

DESIGN DECISION: ExpenseRecord is deliberately permissive. Any string is
accepted for category and description, and any decimal for amount. The
rules that make a record "valid" live in the creation workflow
(expense_tracker.validation), because records read back from storage
must be representable exactly as they were written.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


DATE_FORMAT = "%d/%m/%Y"


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Categories offered by the add form.

    The record model does not enforce membership; this is the list the
    UI presents.
    """
    FOOD = "Alimentação"
    TRANSPORT = "Transporte"
    SHOPPING = "Compras"
    LEISURE = "Lazer"
    HEALTH = "Saúde"
    OTHER = "Outros"


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class ExpenseRecord(BaseModel):
    """
    A single expense entry.

    Records are immutable: there is no edit operation anywhere in the
    system. A record lives in the collection until it is deleted.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        description="Opaque unique identifier, never reused"
    )
    amount: Decimal = Field(
        ...,
        description="Amount in currency units"
    )
    category: str = Field(
        ...,
        description="Category label"
    )
    description: str = Field(
        ...,
        description="Free-text label"
    )
    date: str = Field(
        ...,
        description="Creation day formatted as dd/mm/yyyy"
    )


class CategoryTotal(BaseModel):
    """Summed amount for one category."""
    model_config = ConfigDict(frozen=True)

    category: str
    amount: Decimal


class LoadResult(BaseModel):
    """
    Outcome of loading the persisted collection.

    `dropped` counts fragments that could not be parsed. Those fragments
    are never surfaced as errors; the count exists only for diagnostics.
    """

    records: list[ExpenseRecord] = Field(default_factory=list)
    dropped: int = Field(default=0, ge=0)
    seeded: bool = Field(
        default=False,
        description="True when nothing was persisted and the seed set was returned"
    )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem with add-form input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'not_a_number', 'not_positive')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of validating add-form input."""

    issues: list[ValidationIssue] = Field(default_factory=list)
    amount: Optional[Decimal] = Field(
        default=None,
        description="Parsed amount, when the amount text was numeric"
    )

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

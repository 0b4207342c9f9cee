"""
Expense Creation Validation

The add form hands us raw text. A record is only created when:
- the amount parses as a finite number (comma or dot as decimal separator)
- the amount is greater than zero
- a category was chosen
- a description was typed

IMPORTANT: Validation never fixes input beyond the decimal separator.
Rejected input creates nothing; the caller decides what to show.
"""

from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Union
from uuid import uuid4

from expense_tracker.models.expense import (
    DATE_FORMAT,
    ExpenseRecord,
    ValidationIssue,
    ValidationResult,
)
from expense_tracker.services.storage.codec import parse_decimal


def format_record_date(day: date) -> str:
    """Format a day the way records store it (dd/mm/yyyy)."""
    return day.strftime(DATE_FORMAT)


def parse_amount(raw: Union[str, Decimal, int, float, None]) -> Optional[Decimal]:
    """
    Parse add-form amount input.

    Accepts "12,50" as well as "12.50". Returns None for anything that
    is not a finite number.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        return raw if raw.is_finite() else None
    if isinstance(raw, (int, float)):
        return parse_decimal(str(raw))
    return parse_decimal(raw.replace(",", "."))


class ExpenseValidator:
    """
    Validates add-form input and builds new records.

    The clock and the id factory are injectable so tests can pin them.
    """

    def __init__(
        self,
        today: Optional[Callable[[], date]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._today = today or date.today
        self._id_factory = id_factory or (lambda: str(uuid4()))

    def validate(
        self,
        amount: Union[str, Decimal, int, float, None],
        category: Optional[str],
        description: Optional[str],
    ) -> ValidationResult:
        """
        Check add-form input.

        Returns a ValidationResult listing every problem found.
        """
        issues = []

        parsed = parse_amount(amount)
        if parsed is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="not_a_number",
                message="Amount must be a number",
            ))
        elif parsed <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="not_positive",
                message="Amount must be greater than zero",
            ))

        if not category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Choose a category",
            ))

        if not description:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
            ))

        return ValidationResult(issues=issues, amount=parsed)

    def evaluate(
        self,
        amount: Union[str, Decimal, int, float, None],
        category: Optional[str],
        description: Optional[str],
    ) -> tuple[ValidationResult, Optional[ExpenseRecord]]:
        """
        Validate add-form input and, if it passes, build the record.

        The input is parsed once; the record is None when the result
        has errors.
        """
        result = self.validate(amount, category, description)
        if not result.is_valid:
            return result, None

        record = ExpenseRecord(
            id=self._id_factory(),
            amount=result.amount,
            category=category,
            description=description,
            date=format_record_date(self._today()),
        )
        return result, record

    def create(
        self,
        amount: Union[str, Decimal, int, float, None],
        category: Optional[str],
        description: Optional[str],
    ) -> Optional[ExpenseRecord]:
        """
        Build a new record from add-form input.

        Returns None if the input does not validate.
        """
        return self.evaluate(amount, category, description)[1]

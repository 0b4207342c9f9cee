"""
Main Orchestrator for Expense Tracker

This module ties together all the components and defines the two
objects the screen works with:

1. ExpenseTracker - the stateless collaborator interface
   (load_all / save_all / create / total / top_category)
2. ExpenseSession - the application state the screen owns
   (live record list + which view is showing)

DESIGN DECISION: The session persists the full collection after every
mutation. There is no dirty tracking and no partial save.
"""

from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import CategoryTotal, ExpenseRecord, ValidationResult
from expense_tracker.queries import aggregator
from expense_tracker.services.storage import (
    ExpenseRepository,
    ExpenseStorageInterface,
    create_preferences_store,
)
from expense_tracker.validation import ExpenseValidator


AmountInput = Union[str, Decimal, int, float, None]


class View(str, Enum):
    """The two screens of the app."""
    LIST = "list"
    TOP_CATEGORY = "top_category"


class ExpenseTracker:
    """
    Collaborator interface between the screen and the expense core.

    Holds no records of its own.
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._validator = validator or ExpenseValidator()
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def validator(self) -> ExpenseValidator:
        return self._validator

    def load_all(self) -> list[ExpenseRecord]:
        return self._storage.load_all()

    def save_all(self, records: list[ExpenseRecord]) -> None:
        self._storage.save_all(records)

    def evaluate(
        self,
        amount: AmountInput,
        category: Optional[str],
        description: Optional[str],
    ) -> tuple[ValidationResult, Optional[ExpenseRecord]]:
        """
        Validate add-form input and build the record in one pass.

        The record is None (and the rejection is logged) when the input
        does not validate; the result says why.
        """
        result, record = self._validator.evaluate(amount, category, description)
        if record is None:
            self._audit_logger.log_creation_rejected(
                [issue.model_dump() for issue in result.issues]
            )
            return result, None

        self._audit_logger.log_record_created(
            record_id=record.id,
            category=record.category,
            amount=aggregator.format_amount(record.amount),
        )
        return result, record

    def create(
        self,
        amount: AmountInput,
        category: Optional[str],
        description: Optional[str],
    ) -> Optional[ExpenseRecord]:
        """
        Build a new record from add-form input.

        Returns None (and logs why) when the input is rejected.
        """
        return self.evaluate(amount, category, description)[1]

    def total(self, records: list[ExpenseRecord]) -> Decimal:
        return aggregator.total(records)

    def top_category(self, records: list[ExpenseRecord]) -> Optional[CategoryTotal]:
        return aggregator.top_category(records)


class ExpenseSession:
    """
    Application state owned by the presentation layer.

    The record list here is the only live collection. Storage only ever
    sees snapshots of it.
    """

    def __init__(
        self,
        tracker: ExpenseTracker,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._tracker = tracker
        self._audit_logger = audit_logger or AuditLogger()
        self._records: list[ExpenseRecord] = []
        self._view = View.LIST
        self._last_validation: Optional[ValidationResult] = None

    @property
    def tracker(self) -> ExpenseTracker:
        return self._tracker

    @property
    def records(self) -> list[ExpenseRecord]:
        """Snapshot of the current records, in insertion order."""
        return list(self._records)

    @property
    def last_validation(self) -> Optional[ValidationResult]:
        """Result of the most recent add, for showing why input was rejected."""
        return self._last_validation

    @property
    def view(self) -> View:
        return self._view

    @property
    def count(self) -> int:
        return len(self._records)

    @property
    def total(self) -> Decimal:
        return self._tracker.total(self._records)

    @property
    def top_category(self) -> Optional[CategoryTotal]:
        return self._tracker.top_category(self._records)

    def start(self) -> None:
        """Replace the live list with whatever storage holds."""
        self._records = self._tracker.load_all()

    def show(self, view: View) -> None:
        self._view = View(view)

    def add(
        self,
        amount: AmountInput,
        category: Optional[str],
        description: Optional[str],
    ) -> Optional[ExpenseRecord]:
        """
        Create a record, append it and persist.

        Returns None without touching the list when input is rejected.
        """
        self._last_validation, record = self._tracker.evaluate(amount, category, description)
        if record is None:
            return None
        self._records.append(record)
        self._tracker.save_all(self.records)
        return record

    def remove(self, record_id: str) -> bool:
        """
        Delete the first record with this id and persist.

        Returns False if no record matched; nothing is saved then.
        """
        for index, record in enumerate(self._records):
            if record.id == record_id:
                del self._records[index]
                self._audit_logger.log_record_deleted(record_id)
                self._tracker.save_all(self.records)
                return True
        return False


def create_app_components(
    use_storage: bool = True,
) -> tuple[ExpenseTracker, ExpenseSession]:
    """
    Factory function to create all application components.

    Args:
        use_storage: Whether to use the configured preferences backend.
                    Set to False for an in-memory session.

    Returns:
        (tracker, session) with the session already started
    """
    audit_logger = AuditLogger()
    store = create_preferences_store(None if use_storage else "memory")
    repository = ExpenseRepository(store, audit_logger=audit_logger)

    tracker = ExpenseTracker(repository, audit_logger=audit_logger)
    session = ExpenseSession(tracker, audit_logger=audit_logger)
    session.start()

    return tracker, session

"""
Expense Repository

Persists the full expense collection as a single blob inside a
preferences namespace (see codec.py for the blob layout).

DESIGN DECISION: Neither load nor save ever raises.
- A missing or empty blob yields the seed set (first-run sample data).
- Unparseable fragments are dropped; the rest of the collection loads.
- Any backend failure, not only StorageError, is logged and degraded:
  load falls back to the seed set, save becomes a no-op.

Every repair is written to the audit log so it is not invisible.
"""

from decimal import Decimal
from typing import Optional

from expense_tracker.audit import AuditLogger
from expense_tracker.config import get_settings
from expense_tracker.models.expense import ExpenseRecord, LoadResult
from expense_tracker.services.storage.codec import (
    deserialize_collection,
    serialize_collection,
)
from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    PreferencesStoreInterface,
)


SEED_EXPENSES: tuple[ExpenseRecord, ...] = (
    ExpenseRecord(id="1", amount=Decimal("25.50"), category="Alimentação",
                  description="Lanche", date="01/07/2024"),
    ExpenseRecord(id="2", amount=Decimal("80.00"), category="Transporte",
                  description="Uber", date="01/07/2024"),
    ExpenseRecord(id="3", amount=Decimal("150.00"), category="Compras",
                  description="Supermercado", date="30/06/2024"),
)


def seed_expenses() -> list[ExpenseRecord]:
    """Get a fresh copy of the first-run sample data."""
    return list(SEED_EXPENSES)


class ExpenseRepository(ExpenseStorageInterface):
    """
    Preferences-backed expense storage.

    Holds no reference to the caller's collection: save takes a snapshot,
    load hands out a new list.
    """

    def __init__(
        self,
        store: PreferencesStoreInterface,
        namespace: Optional[str] = None,
        key: Optional[str] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        storage_settings = get_settings().storage
        self._store = store
        self._namespace = namespace or storage_settings.namespace
        self._key = key or storage_settings.key
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> LoadResult:
        try:
            blob = self._store.get_string(self._namespace, self._key)
        except Exception as e:
            self._audit_logger.log_storage_error("load", str(e))
            blob = None

        if not blob:
            records = seed_expenses()
            self._audit_logger.log_seed_used(len(records))
            return LoadResult(records=records, seeded=True)

        records, rejected = deserialize_collection(blob)
        for fragment in rejected:
            self._audit_logger.log_fragment_dropped(fragment)

        self._audit_logger.log_collection_loaded(len(records), len(rejected))
        return LoadResult(records=records, dropped=len(rejected))

    def load_all(self) -> list[ExpenseRecord]:
        return self.load().records

    def save_all(self, records: list[ExpenseRecord]) -> None:
        blob = serialize_collection(list(records))
        try:
            self._store.put_string(self._namespace, self._key, blob)
        except Exception as e:
            self._audit_logger.log_storage_error("save", str(e))
            return
        self._audit_logger.log_collection_saved(len(records))

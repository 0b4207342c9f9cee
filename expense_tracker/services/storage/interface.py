"""
Abstract Storage Interface

DESIGN DECISION: Storage is split into two layers:
1. A preferences store - flat, namespaced string key-value storage.
   It knows nothing about expenses.
2. An expense storage - persists the full expense collection as one
   string value inside a preferences namespace.

This allows us to:
1. Swap the JSON file backend for anything that can hold a string
2. Use in-memory storage for testing
3. Keep the blob format independent of where the blob lives

The whole collection is the unit of durability. There is no partial
or incremental write.
"""

from abc import ABC, abstractmethod
from typing import Optional

from expense_tracker.models.expense import ExpenseRecord, LoadResult


class PreferencesStoreInterface(ABC):
    """
    Abstract interface for flat key-value preference storage.

    Values are strings grouped by namespace.
    """

    @abstractmethod
    def get_string(self, namespace: str, key: str) -> Optional[str]:
        """
        Read a value.

        Returns:
            The stored string, or None if the key is absent

        Raises:
            ReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def put_string(self, namespace: str, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Raises:
            WriteError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def remove(self, namespace: str, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed
        """
        pass


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for the expense collection.

    Implementations never raise: failures degrade to the seed set on
    load and to a no-op on save.
    """

    @abstractmethod
    def load(self) -> LoadResult:
        """
        Load the persisted collection with diagnostics.

        Returns:
            LoadResult with the parsed records and the dropped count
        """
        pass

    @abstractmethod
    def load_all(self) -> list[ExpenseRecord]:
        """
        Load the persisted collection.

        Returns:
            The records in persisted order, or the seed set on first run
        """
        pass

    @abstractmethod
    def save_all(self, records: list[ExpenseRecord]) -> None:
        """
        Replace the persisted collection with `records`.

        Last write wins.
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class ReadError(StorageError):
    """Could not read from the storage backend."""
    pass


class WriteError(StorageError):
    """Could not write to the storage backend."""
    pass

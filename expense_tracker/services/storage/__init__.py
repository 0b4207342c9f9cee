"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Expenses are kept as one blob in a preferences namespace; the JSON file
backend is the default, designed to be swappable.
"""

from expense_tracker.services.storage.interface import (
    ExpenseStorageInterface,
    PreferencesStoreInterface,
    ReadError,
    StorageError,
    WriteError,
)
from expense_tracker.services.storage.codec import (
    deserialize_collection,
    deserialize_record,
    serialize_collection,
    serialize_record,
)
from expense_tracker.services.storage.preferences import (
    InMemoryPreferencesStore,
    JsonFilePreferencesStore,
    create_preferences_store,
)
from expense_tracker.services.storage.repository import (
    SEED_EXPENSES,
    ExpenseRepository,
    seed_expenses,
)

__all__ = [
    # Interfaces
    "ExpenseStorageInterface",
    "PreferencesStoreInterface",
    # Exceptions
    "ReadError",
    "StorageError",
    "WriteError",
    # Blob codec
    "deserialize_collection",
    "deserialize_record",
    "serialize_collection",
    "serialize_record",
    # Preferences backends
    "InMemoryPreferencesStore",
    "JsonFilePreferencesStore",
    "create_preferences_store",
    # Expense repository
    "SEED_EXPENSES",
    "ExpenseRepository",
    "seed_expenses",
]

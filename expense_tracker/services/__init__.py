"""Services package."""

from expense_tracker.services.storage import (
    ExpenseRepository,
    ExpenseStorageInterface,
    InMemoryPreferencesStore,
    JsonFilePreferencesStore,
    PreferencesStoreInterface,
    ReadError,
    StorageError,
    WriteError,
    create_preferences_store,
)

__all__ = [
    "ExpenseRepository",
    "ExpenseStorageInterface",
    "InMemoryPreferencesStore",
    "JsonFilePreferencesStore",
    "PreferencesStoreInterface",
    "ReadError",
    "StorageError",
    "WriteError",
    "create_preferences_store",
]

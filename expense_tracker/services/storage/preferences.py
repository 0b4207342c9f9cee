"""
Preferences Store Implementations

A preferences store is flat, namespaced string storage: the same shape
as a mobile settings store. Two backends:

- InMemoryPreferencesStore: dict-backed, for tests and throwaway sessions
- JsonFilePreferencesStore: one JSON object per namespace on disk

TRADEOFFS (JSON file backend):
- Every write rewrites the whole namespace file (fine, a namespace holds
  a handful of keys)
- No locking (a single exclusive owner is assumed)
- Writes go to a temp file that replaces the target, so a crash mid-write
  leaves the previous file intact
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from expense_tracker.config import get_settings
from expense_tracker.services.storage.interface import (
    PreferencesStoreInterface,
    ReadError,
    WriteError,
)


class InMemoryPreferencesStore(PreferencesStoreInterface):
    """Dict-backed preferences store."""

    def __init__(self, initial: Optional[dict[str, dict[str, str]]] = None):
        self._data: dict[str, dict[str, str]] = {
            namespace: dict(values) for namespace, values in (initial or {}).items()
        }

    def get_string(self, namespace: str, key: str) -> Optional[str]:
        return self._data.get(namespace, {}).get(key)

    def put_string(self, namespace: str, key: str, value: str) -> None:
        self._data.setdefault(namespace, {})[key] = value

    def remove(self, namespace: str, key: str) -> bool:
        values = self._data.get(namespace, {})
        if key in values:
            del values[key]
            return True
        return False


class JsonFilePreferencesStore(PreferencesStoreInterface):
    """
    File-backed preferences store.

    Namespace "expense_prefs" lives in <data_dir>/expense_prefs.json as a
    JSON object mapping keys to string values. A missing file is an
    empty namespace. So is a corrupt one: it is treated as absent data,
    never as a fatal error.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self._data_dir = Path(data_dir or get_settings().storage.data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, namespace: str) -> Path:
        """Get the file backing a namespace."""
        return self._data_dir / f"{namespace}.json"

    def _read_namespace(self, namespace: str) -> dict[str, str]:
        path = self.path_for(namespace)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except ValueError:
            # invalid JSON or invalid UTF-8; treated as absent data
            return {}
        except OSError as e:
            raise ReadError(f"Failed to read preferences file {path}: {e}")

        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    @retry(
        retry=retry_if_exception_type(OSError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        reraise=True,
    )
    def _write_namespace(self, namespace: str, values: dict[str, str]) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(namespace)
        fd, tmp_path = tempfile.mkstemp(
            dir=self._data_dir, prefix=f".{namespace}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(values, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get_string(self, namespace: str, key: str) -> Optional[str]:
        return self._read_namespace(namespace).get(key)

    def put_string(self, namespace: str, key: str, value: str) -> None:
        values = self._read_namespace(namespace)
        values[key] = value
        try:
            self._write_namespace(namespace, values)
        except OSError as e:
            raise WriteError(f"Failed to write preferences file {self.path_for(namespace)}: {e}")

    def remove(self, namespace: str, key: str) -> bool:
        values = self._read_namespace(namespace)
        if key not in values:
            return False
        del values[key]
        try:
            self._write_namespace(namespace, values)
        except OSError as e:
            raise WriteError(f"Failed to write preferences file {self.path_for(namespace)}: {e}")
        return True


def create_preferences_store(backend: Optional[str] = None) -> PreferencesStoreInterface:
    """Build the preferences store selected in settings."""
    storage_settings = get_settings().storage
    backend = backend or storage_settings.backend
    if backend == "memory":
        return InMemoryPreferencesStore()
    if backend == "json":
        return JsonFilePreferencesStore(storage_settings.data_dir)
    raise ValueError(f"Unknown preferences backend: {backend}")

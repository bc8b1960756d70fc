"""Key-value persistence for transactions and budgets.

Each collection is serialized independently as a JSON array string under
its own key, the same layout a browser's local storage would hold.  Reads
never fail: missing, corrupt or wrongly shaped data loads as an empty list
and individual bad records are skipped with a warning.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, TypeVar

from .config import BUDGETS_KEY, STORE_PATH, TRANSACTIONS_KEY
from .models import Budget, Transaction

logger = logging.getLogger(__name__)

T = TypeVar('T')


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """In-process key-value store, handy for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore:
    """Key-value store persisted as a single JSON object on disk."""

    def __init__(self, path: Optional[Path] = None) -> None:
        """Initialize the store.

        Args:
            path: Optional custom file location. Defaults to STORE_PATH from config.
        """
        self.path = Path(path) if path is not None else STORE_PATH

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning("Could not read key-value store %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring key-value store %s: expected an object", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``.

        Raises:
            OSError: If the file cannot be written
        """
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with self.path.open('w', encoding='utf-8') as handle:
                json.dump(data, handle, indent=2, sort_keys=True)
        except OSError as e:
            raise OSError(f"Failed to write key-value store {self.path}: {e}") from e


class FinanceStorage:
    """Serializes the transaction and budget collections to a key-value store."""

    def __init__(self, store: Optional[KeyValueStore] = None) -> None:
        self.store: KeyValueStore = store if store is not None else JsonFileKeyValueStore()

    def _load_array(self, key: str, parse: Callable[[Dict[str, Any]], T]) -> List[T]:
        raw = self.store.get_item(key)
        if not raw:
            return []
        try:
            entries = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Discarding corrupt data under %s: %s", key, e)
            return []
        if not isinstance(entries, list):
            logger.warning("Discarding data under %s: expected a JSON array", key)
            return []

        records: List[T] = []
        for entry in entries:
            try:
                records.append(parse(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed record under %s: %s", key, e)
        return records

    def _save_array(self, key: str, records: List[Dict[str, Any]]) -> None:
        self.store.set_item(key, json.dumps(records))

    def load_transactions(self) -> List[Transaction]:
        return self._load_array(TRANSACTIONS_KEY, Transaction.from_dict)

    def save_transactions(self, transactions: List[Transaction]) -> None:
        self._save_array(TRANSACTIONS_KEY, [tx.to_dict() for tx in transactions])

    def load_budgets(self) -> List[Budget]:
        return self._load_array(BUDGETS_KEY, Budget.from_dict)

    def save_budgets(self, budgets: List[Budget]) -> None:
        self._save_array(BUDGETS_KEY, [b.to_dict() for b in budgets])

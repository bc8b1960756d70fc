"""Transaction store.

Owns the ordered list of :class:`~finance_tracker.models.Transaction`
records.  Nothing outside the store holds a reference to the internal
list; :meth:`TransactionStore.list` returns a copy.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, List, Mapping, Optional

from .models import Transaction

logger = logging.getLogger(__name__)

TransactionData = Mapping[str, Any]


def _timestamp_id() -> str:
    return str(int(time.time() * 1000))


class TransactionStore:
    """Encapsulated collection of transactions."""

    def __init__(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        """Initialize the store.

        Args:
            transactions: Optional records to seed the store with (e.g. loaded
                from storage). Later duplicates of an id are dropped.
            id_factory: Callable producing candidate ids. Defaults to a
                millisecond timestamp.
        """
        self._items: List[Transaction] = []
        self._id_factory = id_factory or _timestamp_id
        seen = set()
        for tx in transactions or []:
            if tx.id in seen:
                logger.warning("Dropping duplicate transaction id %s", tx.id)
                continue
            seen.add(tx.id)
            self._items.append(tx)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, tx_id: object) -> bool:
        return any(tx.id == tx_id for tx in self._items)

    def _new_id(self) -> str:
        candidate = self._id_factory()
        taken = {tx.id for tx in self._items}
        # Timestamps can repeat within the same millisecond
        while candidate in taken:
            candidate = str(int(candidate) + 1) if candidate.isdigit() else f"{candidate}-1"
        return candidate

    @staticmethod
    def _build(tx_id: str, data: TransactionData) -> Transaction:
        return Transaction(
            id=tx_id,
            amount=float(data['amount']),
            date=str(data['date']),
            description=str(data.get('description') or ''),
            category=str(data['category']),
            type=str(data['type']),
        )

    def add(self, data: TransactionData) -> Transaction:
        """Append a new transaction with a freshly generated id."""
        tx = self._build(self._new_id(), data)
        self._items.append(tx)
        logger.info("Added %s transaction %s (%.2f)", tx.type, tx.id, tx.amount)
        return tx

    def edit(self, tx_id: str, data: TransactionData) -> Optional[Transaction]:
        """Replace the transaction ``tx_id`` keeping its id.

        Returns:
            The updated record, or ``None`` if no transaction has that id
        """
        for index, existing in enumerate(self._items):
            if existing.id == tx_id:
                updated = self._build(existing.id, data)
                self._items[index] = updated
                logger.info("Edited transaction %s", tx_id)
                return updated
        logger.debug("Edit ignored, transaction %s not found", tx_id)
        return None

    def delete(self, tx_id: str) -> bool:
        """Remove the transaction ``tx_id``; returns whether one was removed."""
        before = len(self._items)
        self._items = [tx for tx in self._items if tx.id != tx_id]
        removed = len(self._items) != before
        if removed:
            logger.info("Deleted transaction %s", tx_id)
        return removed

    def get(self, tx_id: str) -> Optional[Transaction]:
        return next((tx for tx in self._items if tx.id == tx_id), None)

    def list(self) -> List[Transaction]:
        return list(self._items)

    def sorted_by_date(self) -> List[Transaction]:
        """All transactions, newest date first."""
        return sorted(self._items, key=lambda tx: tx.date, reverse=True)

    def recent(self, count: int = 5) -> List[Transaction]:
        return self.sorted_by_date()[:count]

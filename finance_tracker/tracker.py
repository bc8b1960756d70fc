"""Tracker facade tying the stores, derived state and persistence together.

Every mutating call follows the same sequence: validate the input, apply
the change to the owning store, recompute derived state synchronously and
persist.  Invalid input is a silent no-op (logged at debug level) so user
interfaces never have to handle exceptions from here.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, List, Mapping, Optional

import pandas as pd

from .analytics import DashboardSummary, FinanceAnalytics, Insight, month_key
from .budgets import BudgetStore
from .categories import Category, available_categories
from .config import RECENT_TRANSACTION_COUNT
from .models import TRANSACTION_TYPES, Budget, Transaction
from .storage import FinanceStorage
from .transactions import TransactionData, TransactionStore

logger = logging.getLogger(__name__)


def _positive_amount(value: Any) -> Optional[float]:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    return amount if math.isfinite(amount) and amount > 0 else None


def validate_transaction(data: Mapping[str, Any]) -> Optional[dict]:
    """Return a cleaned copy of ``data`` or ``None`` if it cannot be stored."""
    amount = _positive_amount(data.get('amount'))
    category = str(data.get('category') or '').strip()
    tx_date = str(data.get('date') or '').strip()
    tx_type = data.get('type')
    if amount is None or not category or not tx_date or tx_type not in TRANSACTION_TYPES:
        return None
    return {
        'amount': amount,
        'date': tx_date,
        'description': str(data.get('description') or '').strip(),
        'category': category,
        'type': tx_type,
    }


class FinanceTracker:
    """Owns the transaction and budget stores for one session."""

    def __init__(
        self,
        storage: Optional[FinanceStorage] = None,
        today: Optional[date] = None,
    ) -> None:
        """Load persisted state and bring derived fields up to date.

        Args:
            storage: Persistence adapter. Defaults to the JSON file store.
            today: Fixed "current" date. When omitted the real date is read
                on each refresh.
        """
        self.storage = storage if storage is not None else FinanceStorage()
        self._today = today
        self._transactions = TransactionStore(self.storage.load_transactions())
        self._budgets = BudgetStore(self.storage.load_budgets())
        self.refresh()

    @property
    def current_month(self) -> str:
        return month_key(self._today)

    @property
    def transactions(self) -> List[Transaction]:
        return self._transactions.list()

    @property
    def budgets(self) -> List[Budget]:
        return self._budgets.list()

    # Mutations -------------------------------------------------------------

    def add_transaction(self, data: TransactionData) -> Optional[Transaction]:
        cleaned = validate_transaction(data)
        if cleaned is None:
            logger.debug("Rejected transaction input: %r", dict(data))
            return None
        tx = self._transactions.add(cleaned)
        self._after_transactions_changed()
        return tx

    def edit_transaction(self, tx_id: Optional[str], data: TransactionData) -> Optional[Transaction]:
        if not tx_id:
            logger.debug("Edit ignored, no transaction selected")
            return None
        cleaned = validate_transaction(data)
        if cleaned is None:
            logger.debug("Rejected edit for %s: %r", tx_id, dict(data))
            return None
        updated = self._transactions.edit(tx_id, cleaned)
        if updated is not None:
            self._after_transactions_changed()
        return updated

    def delete_transaction(self, tx_id: str) -> bool:
        removed = self._transactions.delete(tx_id)
        if removed:
            self._after_transactions_changed()
        return removed

    def add_budget(self, category: str, amount: Any) -> Optional[Budget]:
        value = _positive_amount(amount)
        if value is None:
            logger.debug("Rejected budget amount %r for %s", amount, category)
            return None
        try:
            self._budgets.add(category, value)
        except ValueError as e:
            logger.debug("Rejected budget: %s", e)
            return None
        self._after_budgets_changed()
        return self._budgets.get(category)

    def delete_budget(self, category: str) -> bool:
        removed = self._budgets.delete(category)
        if removed:
            self._after_budgets_changed()
        return removed

    # Derived state ---------------------------------------------------------

    def refresh(self) -> List[Budget]:
        """Recompute every derived field; safe to call at any time."""
        return self._budgets.recompute(self._transactions.list(), self.current_month)

    def _after_transactions_changed(self) -> None:
        self.refresh()
        self._persist(self.storage.save_transactions, self._transactions.list())
        self._persist(self.storage.save_budgets, self._budgets.list())

    def _after_budgets_changed(self) -> None:
        self.refresh()
        self._persist(self.storage.save_budgets, self._budgets.list())

    @staticmethod
    def _persist(save, records) -> None:
        # Collections are written independently, without a shared transaction.
        try:
            save(records)
        except OSError as e:
            logger.error("Failed to persist finance data: %s", e)

    # Read side -------------------------------------------------------------

    def analytics(self) -> FinanceAnalytics:
        # The month can roll over while a session is open
        self.refresh()
        return FinanceAnalytics(self._transactions.list(), self._budgets.list(), self._today)

    def summary(self) -> DashboardSummary:
        return self.analytics().dashboard_summary()

    def insights(self) -> List[Insight]:
        return self.analytics().generate_insights()

    def monthly_series(self) -> pd.DataFrame:
        return self.analytics().monthly_expense_series()

    def category_breakdown(self) -> pd.DataFrame:
        return self.analytics().category_totals()

    def recent_transactions(self, count: int = RECENT_TRANSACTION_COUNT) -> List[Transaction]:
        return self._transactions.recent(count)

    def transaction_history(self) -> List[Transaction]:
        return self._transactions.sorted_by_date()

    def get_transaction(self, tx_id: str) -> Optional[Transaction]:
        return self._transactions.get(tx_id)

    def available_categories(self) -> List[Category]:
        return available_categories(self._budgets.categories())

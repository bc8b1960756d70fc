"""Budget store and spent-amount recomputation.

A budget's ``spent`` value is always derived: :meth:`BudgetStore.recompute`
rebuilds it from the full transaction list every time, so it can never
drift from the transactions it summarizes.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Optional

from .models import Budget, Transaction

logger = logging.getLogger(__name__)


def spent_for_category(transactions: Iterable[Transaction], category: str, month: str) -> float:
    """Sum of expenses in ``category`` whose date starts with ``month``.

    Example:
        >>> txs = [Transaction('1', 40.0, '2024-03-02', 'Lunch', 'food', 'expense')]
        >>> spent_for_category(txs, 'food', '2024-03')
        40.0
    """
    return float(sum(
        tx.amount
        for tx in transactions
        if tx.is_expense and tx.category == category and tx.date.startswith(month)
    ))


class BudgetStore:
    """Collection of per-category monthly limits, at most one per category."""

    def __init__(self, budgets: Optional[Iterable[Budget]] = None) -> None:
        self._items: List[Budget] = []
        for budget in budgets or []:
            if self.get(budget.category) is not None:
                logger.warning("Dropping duplicate budget for %s", budget.category)
                continue
            self._items.append(budget)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, category: object) -> bool:
        return any(b.category == category for b in self._items)

    def add(self, category: str, amount: float) -> Budget:
        """Create a budget for ``category`` with ``spent`` initialised to zero.

        Raises:
            ValueError: If the category is empty, already budgeted, or the
                amount is not positive
        """
        if not category:
            raise ValueError("Budget category cannot be empty")
        if category in self:
            raise ValueError(f"A budget for '{category}' already exists")
        amount = float(amount)
        if amount <= 0:
            raise ValueError("Budget amount must be greater than zero")
        budget = Budget(category=category, amount=amount, spent=0.0)
        self._items.append(budget)
        logger.info("Added budget for %s (%.2f)", category, amount)
        return budget

    def delete(self, category: str) -> bool:
        before = len(self._items)
        self._items = [b for b in self._items if b.category != category]
        removed = len(self._items) != before
        if removed:
            logger.info("Deleted budget for %s", category)
        return removed

    def get(self, category: str) -> Optional[Budget]:
        return next((b for b in self._items if b.category == category), None)

    def list(self) -> List[Budget]:
        return list(self._items)

    def categories(self) -> List[str]:
        return [b.category for b in self._items]

    def total_amount(self) -> float:
        return float(sum(b.amount for b in self._items))

    def recompute(self, transactions: Iterable[Transaction], current_month: str) -> List[Budget]:
        """Recalculate ``spent`` for every budget from scratch.

        Args:
            transactions: The complete transaction set
            current_month: Month prefix in "YYYY-MM" form

        Returns:
            The recomputed budgets
        """
        transactions = list(transactions)
        self._items = [
            replace(b, spent=spent_for_category(transactions, b.category, current_month))
            for b in self._items
        ]
        return self.list()

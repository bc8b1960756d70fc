"""Record types for transactions and budgets.

Both records are immutable.  Stores hand out the records themselves, so
freezing them is what keeps callers from editing stored state in place;
changes go through the store operations and produce new records via
:func:`dataclasses.replace`.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict

INCOME = 'income'
EXPENSE = 'expense'
TRANSACTION_TYPES = (INCOME, EXPENSE)


def parse_amount(value: Any) -> float:
    """Convert a stored amount, rejecting anything that is not a finite positive number.

    Raises:
        ValueError: If the amount is not numeric, not finite or not positive
    """
    amount = float(value)
    if not math.isfinite(amount) or amount <= 0:
        raise ValueError(f"Amount must be a positive number, got {value!r}")
    return amount


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: float
    date: str  # "YYYY-MM-DD"
    description: str
    category: str
    type: str  # INCOME or EXPENSE

    @property
    def month(self) -> str:
        """The "YYYY-MM" prefix used for month matching."""
        return self.date[:7]

    @property
    def is_expense(self) -> bool:
        return self.type == EXPENSE

    @property
    def is_income(self) -> bool:
        return self.type == INCOME

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transaction':
        """Build a transaction from its serialized shape.

        Raises:
            KeyError: If a required field is missing
            ValueError: If the amount is not a positive number or the type is unknown
            TypeError: If ``data`` is not a mapping
        """
        tx_type = str(data['type'])
        if tx_type not in TRANSACTION_TYPES:
            raise ValueError(f"Unknown transaction type: {tx_type!r}")
        return cls(
            id=str(data['id']),
            amount=parse_amount(data['amount']),
            date=str(data['date']),
            description=str(data.get('description') or ''),
            category=str(data['category']),
            type=tx_type,
        )


@dataclass(frozen=True)
class Budget:
    category: str
    amount: float
    spent: float = 0.0

    @property
    def ratio(self) -> float:
        return self.spent / self.amount if self.amount else float('inf')

    @property
    def percentage_used(self) -> float:
        return self.ratio * 100

    @property
    def remaining(self) -> float:
        """Amount left before the limit; negative once over budget."""
        return self.amount - self.spent

    @property
    def is_over_budget(self) -> bool:
        return self.spent > self.amount

    def is_near_limit(self, threshold: float = 0.8) -> bool:
        """True when usage is above ``threshold`` but not over the limit."""
        return not self.is_over_budget and self.ratio > threshold

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Budget':
        return cls(
            category=str(data['category']),
            amount=parse_amount(data['amount']),
            spent=float(data.get('spent') or 0.0),
        )

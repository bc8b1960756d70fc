"""Static category registry.

Every transaction and budget refers to one of these categories by id.
Ids that are not in the registry resolve to the catch-all ``other``
category wherever display metadata is needed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    icon: str
    color: str


CATEGORIES: List[Category] = [
    Category('food', 'Food & Dining', '🍕', '#ef4444'),
    Category('transport', 'Transportation', '🚗', '#3b82f6'),
    Category('shopping', 'Shopping', '🛍️', '#8b5cf6'),
    Category('entertainment', 'Entertainment', '🎬', '#f59e0b'),
    Category('bills', 'Bills & Utilities', '💡', '#10b981'),
    Category('healthcare', 'Healthcare', '🏥', '#ec4899'),
    Category('education', 'Education', '📚', '#6366f1'),
    Category('travel', 'Travel', '✈️', '#14b8a6'),
    Category('other', 'Other', '📦', '#6b7280'),
]

FALLBACK_CATEGORY = CATEGORIES[-1]

_BY_ID = {category.id: category for category in CATEGORIES}


def find_category(category_id: str) -> Optional[Category]:
    """Return the category with ``category_id`` or ``None``."""
    return _BY_ID.get(category_id)


def get_category(category_id: str) -> Category:
    """Return the category with ``category_id``, falling back to ``other``.

    Example:
        >>> get_category('food').name
        'Food & Dining'
        >>> get_category('unknown').id
        'other'
    """
    return _BY_ID.get(category_id, FALLBACK_CATEGORY)


def category_ids() -> List[str]:
    return [category.id for category in CATEGORIES]


def available_categories(budgeted: Iterable[str]) -> List[Category]:
    """Categories that do not have a budget yet, in registry order."""
    taken = set(budgeted)
    return [category for category in CATEGORIES if category.id not in taken]

"""Derived aggregation engine.

This module turns the transaction and budget collections into the derived
views the dashboard shows: the monthly expense series, per-category totals,
textual insights and the headline summary.  All of it is recomputed from
scratch on every call; nothing here keeps state between calls.

Months are matched by string prefix ("YYYY-MM") on the transaction date.
The monthly series covers the last six months of data, while the top
category and budget alerts only look at the current month.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional

import pandas as pd

from .categories import get_category
from .config import MONTHLY_SERIES_LENGTH, NEAR_BUDGET_THRESHOLD
from .formatting import format_currency, month_label, pluralize_category
from .models import EXPENSE, INCOME, Budget, Transaction

TRANSACTION_COLUMNS = ['id', 'amount', 'date', 'description', 'category', 'type']
SERIES_COLUMNS = ['month', 'label', 'amount']
CATEGORY_COLUMNS = ['category', 'name', 'color', 'amount']

WARNING = 'warning'
POSITIVE = 'positive'
INFO = 'info'


@dataclass(frozen=True)
class Insight:
    kind: str  # WARNING, POSITIVE or INFO
    title: str
    description: str


@dataclass(frozen=True)
class DashboardSummary:
    month: str
    income: float
    expenses: float
    total_budget: float
    budget_used: float  # percentage; NaN when there are no budgets

    @property
    def net(self) -> float:
        return self.income - self.expenses

    @property
    def budget_used_available(self) -> bool:
        return math.isfinite(self.budget_used)


def month_key(day: Optional[date] = None) -> str:
    """Return the "YYYY-MM" key for ``day`` (defaults to today)."""
    return (day or date.today()).strftime('%Y-%m')


def previous_month(month: str) -> str:
    """Return the month before ``month``.

    Example:
        >>> previous_month('2024-01')
        '2023-12'
    """
    return (pd.Period(month, freq='M') - 1).strftime('%Y-%m')


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Build a DataFrame with one row per transaction and a ``month`` column."""
    df = pd.DataFrame([tx.to_dict() for tx in transactions], columns=TRANSACTION_COLUMNS)
    df['amount'] = pd.to_numeric(df['amount'], errors='coerce').fillna(0.0).astype(float)
    df['date'] = df['date'].fillna('').astype(str)
    df['month'] = df['date'].str[:7]
    return df


class FinanceAnalytics:
    """Derived views over a snapshot of transactions and budgets."""

    def __init__(
        self,
        transactions: Iterable[Transaction],
        budgets: Optional[Iterable[Budget]] = None,
        today: Optional[date] = None,
    ) -> None:
        self.data = transactions_frame(transactions)
        self.budgets: List[Budget] = list(budgets or [])
        self.current_month = month_key(today)

    def _expense_rows(self, df: Optional[pd.DataFrame] = None) -> pd.DataFrame:
        source = df if df is not None else self.data
        return source[source['type'] == EXPENSE].copy()

    def _month_rows(self, month: str) -> pd.DataFrame:
        return self.data[self.data['date'].str.startswith(month)]

    def monthly_total(self, month: str, tx_type: str = EXPENSE) -> float:
        """Sum of ``tx_type`` amounts dated within ``month``."""
        rows = self._month_rows(month)
        return float(rows.loc[rows['type'] == tx_type, 'amount'].sum())

    def monthly_expense_series(self, months: int = MONTHLY_SERIES_LENGTH) -> pd.DataFrame:
        """Expense totals per month, oldest first, limited to the last ``months``."""
        expenses = self._expense_rows()
        if expenses.empty:
            return pd.DataFrame(columns=SERIES_COLUMNS)

        # "YYYY-MM" keys sort chronologically as strings
        monthly = expenses.groupby('month')['amount'].sum().sort_index().tail(months)
        series = monthly.reset_index()
        series['label'] = series['month'].map(month_label)
        return series[SERIES_COLUMNS].reset_index(drop=True)

    def category_totals(self) -> pd.DataFrame:
        """Expense totals per category, largest first.

        Unknown category ids are folded into the catch-all category.
        """
        expenses = self._expense_rows()
        if expenses.empty:
            return pd.DataFrame(columns=CATEGORY_COLUMNS)

        expenses['category'] = expenses['category'].map(lambda c: get_category(c).id)
        totals = (
            expenses.groupby('category', sort=False)['amount']
            .sum()
            .sort_values(ascending=False, kind='stable')
            .reset_index()
        )
        totals['name'] = totals['category'].map(lambda c: get_category(c).name)
        totals['color'] = totals['category'].map(lambda c: get_category(c).color)
        return totals[CATEGORY_COLUMNS]

    def current_month_category_spending(self) -> pd.Series:
        """Current-month expense totals by raw category id, in first-seen order."""
        expenses = self._expense_rows(self._month_rows(self.current_month))
        return expenses.groupby('category', sort=False)['amount'].sum()

    def spending_change(self) -> Optional[float]:
        """Percent change of expenses against last month.

        Returns ``None`` when last month has no expenses, since there is no
        baseline to compare against.
        """
        previous = self.monthly_total(previous_month(self.current_month))
        if previous <= 0:
            return None
        current = self.monthly_total(self.current_month)
        return (current - previous) / previous * 100

    def generate_insights(self, threshold: float = NEAR_BUDGET_THRESHOLD) -> List[Insight]:
        """Generate the ordered list of insights.

        Every check is independent: any number of them may fire.
        """
        insights: List[Insight] = []

        change = self.spending_change()
        if change:
            increased = change > 0
            direction = 'increased' if increased else 'decreased'
            insights.append(Insight(
                kind=WARNING if increased else POSITIVE,
                title=f"Spending {direction.capitalize()}",
                description=(
                    f"Your expenses {direction} by {abs(change):.1f}% compared to last month"
                ),
            ))

        spending = self.current_month_category_spending()
        if not spending.empty:
            top_id = spending.idxmax()
            insights.append(Insight(
                kind=INFO,
                title='Top Spending Category',
                description=(
                    f"You spent the most on {get_category(top_id).name} "
                    f"({format_currency(float(spending[top_id]))}) this month"
                ),
            ))

        over = [b for b in self.budgets if b.is_over_budget]
        if over:
            insights.append(Insight(
                kind=WARNING,
                title='Over Budget Alert',
                description=f"You're over budget in {pluralize_category(len(over))}",
            ))

        near = [b for b in self.budgets if b.is_near_limit(threshold)]
        if near:
            insights.append(Insight(
                kind=INFO,
                title='Budget Warning',
                description=f"You're close to your budget limit in {pluralize_category(len(near))}",
            ))

        return insights

    def dashboard_summary(self) -> DashboardSummary:
        income = self.monthly_total(self.current_month, INCOME)
        expenses = self.monthly_total(self.current_month, EXPENSE)
        total_budget = float(sum(b.amount for b in self.budgets))
        budget_used = expenses / total_budget * 100 if total_budget > 0 else math.nan
        return DashboardSummary(
            month=self.current_month,
            income=income,
            expenses=expenses,
            total_budget=total_budget,
            budget_used=budget_used,
        )

    def budget_overview(self) -> List[Dict[str, object]]:
        """Per-budget rows for progress displays."""
        rows = []
        for budget in self.budgets:
            category = get_category(budget.category)
            rows.append({
                'category': budget.category,
                'name': category.name,
                'icon': category.icon,
                'color': category.color,
                'amount': budget.amount,
                'spent': budget.spent,
                'percentage_used': budget.percentage_used,
                'remaining': budget.remaining,
                'over_budget': budget.is_over_budget,
            })
        return rows


# Convenience functions over a one-off snapshot


def monthly_expense_series(
    transactions: Iterable[Transaction], months: int = MONTHLY_SERIES_LENGTH
) -> pd.DataFrame:
    return FinanceAnalytics(transactions).monthly_expense_series(months)


def category_totals(transactions: Iterable[Transaction]) -> pd.DataFrame:
    return FinanceAnalytics(transactions).category_totals()


def generate_insights(
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    today: Optional[date] = None,
) -> List[Insight]:
    return FinanceAnalytics(transactions, budgets, today).generate_insights()


def dashboard_summary(
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    today: Optional[date] = None,
) -> DashboardSummary:
    return FinanceAnalytics(transactions, budgets, today).dashboard_summary()

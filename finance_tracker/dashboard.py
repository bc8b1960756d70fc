"""Streamlit app for the finance tracker.

The app keeps one :class:`~finance_tracker.tracker.FinanceTracker` in the
session state and renders five tabs on top of it: the dashboard overview,
transaction entry and history, analytics charts, budget management and
insights.  All changes go through the tracker, which recomputes derived
state and persists before the page reruns.

To run the app from the command line::

    streamlit run finance_tracker/dashboard.py
"""

from __future__ import annotations

import os
import sys
from datetime import date
from typing import Optional

import streamlit as st

# Support both ``streamlit run finance_tracker/dashboard.py`` (no package
# context) and imports as part of the package.
if __package__:
    from . import visualization as viz
    from .analytics import INFO, POSITIVE, WARNING, Insight
    from .categories import category_ids, get_category
    from .config import configure_logging, ensure_data_directories
    from .formatting import escape_dollar_for_markdown, format_currency, format_percentage
    from .models import EXPENSE, INCOME, Transaction
    from .tracker import FinanceTracker
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from finance_tracker import visualization as viz  # type: ignore
    from finance_tracker.analytics import INFO, POSITIVE, WARNING, Insight  # type: ignore
    from finance_tracker.categories import category_ids, get_category  # type: ignore
    from finance_tracker.config import configure_logging, ensure_data_directories  # type: ignore
    from finance_tracker.formatting import (  # type: ignore
        escape_dollar_for_markdown,
        format_currency,
        format_percentage,
    )
    from finance_tracker.models import EXPENSE, INCOME, Transaction  # type: ignore
    from finance_tracker.tracker import FinanceTracker  # type: ignore

INSIGHT_RENDERERS = {
    WARNING: st.warning,
    POSITIVE: st.success,
    INFO: st.info,
}


def _rerun() -> None:
    rerun_fn = getattr(st, 'rerun', None) or getattr(st, 'experimental_rerun', None)
    if rerun_fn:
        rerun_fn()


def get_tracker() -> FinanceTracker:
    """Return the session's tracker, creating it on first use."""
    if 'tracker' not in st.session_state:
        st.session_state.tracker = FinanceTracker()
    return st.session_state.tracker


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        return date.today()


def _signed_amount(tx: Transaction) -> str:
    sign = '+' if tx.type == INCOME else '-'
    return f"{sign}{escape_dollar_for_markdown(tx.amount)}"


def render_dashboard(tracker: FinanceTracker) -> None:
    summary = tracker.summary()

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Income", format_currency(summary.income), help="This month")
    col2.metric("Total Expenses", format_currency(summary.expenses), help="This month")
    col3.metric("Net Balance", format_currency(summary.net), help="This month")
    col4.metric("Budget Used", format_percentage(summary.budget_used), help="Of total budget")
    if not summary.budget_used_available:
        st.caption("Set a budget to track how much of it you've used.")

    left, right = st.columns(2)
    with left:
        st.subheader("Recent Transactions")
        recent = tracker.recent_transactions()
        if not recent:
            st.info("No transactions yet")
        for tx in recent:
            st.markdown(f"**{tx.description or get_category(tx.category).name}** · {tx.date} · {_signed_amount(tx)}")
    with right:
        st.subheader("Budget Overview")
        rows = tracker.analytics().budget_overview()
        if not rows:
            st.info("No budgets set yet")
        for row in rows[:5]:
            st.markdown(
                f"{row['icon']} **{row['name']}** "
                f"{escape_dollar_for_markdown(row['spent'])} / {escape_dollar_for_markdown(row['amount'])}"
            )
            st.progress(min(row['percentage_used'] / 100, 1.0))


def _transaction_form(tracker: FinanceTracker, editing: Optional[Transaction]) -> None:
    ids = category_ids()
    with st.form('transaction_form', clear_on_submit=True):
        st.subheader("Edit Transaction" if editing else "Add Transaction")
        tx_type = st.radio(
            "Type", [EXPENSE, INCOME],
            index=[EXPENSE, INCOME].index(editing.type) if editing else 0,
            horizontal=True,
        )
        amount = st.number_input(
            "Amount ($)", min_value=0.0, step=0.01,
            value=float(editing.amount) if editing else 0.0,
        )
        tx_date = st.date_input(
            "Date", value=_parse_date(editing.date) if editing else date.today(),
        )
        description = st.text_input("Description", value=editing.description if editing else "")
        category = st.selectbox(
            "Category", ids,
            index=ids.index(editing.category) if editing and editing.category in ids else 0,
            format_func=lambda c: f"{get_category(c).icon} {get_category(c).name}",
        )
        submitted = st.form_submit_button("Update Transaction" if editing else "Add Transaction")

    if editing and st.button("Cancel edit"):
        st.session_state.editing_id = None
        _rerun()

    if submitted:
        data = {
            'amount': amount,
            'date': tx_date.isoformat(),
            'description': description,
            'category': category,
            'type': tx_type,
        }
        if editing:
            result = tracker.edit_transaction(editing.id, data)
            st.session_state.editing_id = None
        else:
            result = tracker.add_transaction(data)
        if result is None:
            st.warning("Enter a positive amount and pick a category.")
        else:
            _rerun()


def render_transactions(tracker: FinanceTracker) -> None:
    editing_id = st.session_state.get('editing_id')
    editing = tracker.get_transaction(editing_id) if editing_id else None

    form_col, list_col = st.columns(2)
    with form_col:
        _transaction_form(tracker, editing)
    with list_col:
        st.subheader("Transaction History")
        history = tracker.transaction_history()
        if not history:
            st.info("No transactions yet. Add your first transaction!")
        for tx in history:
            category = get_category(tx.category)
            info, edit_col, delete_col = st.columns([6, 1, 1])
            info.markdown(
                f"{category.icon} **{tx.description or category.name}** · {category.name} · "
                f"{tx.date} · {_signed_amount(tx)}"
            )
            if edit_col.button("✏️", key=f"edit_{tx.id}"):
                st.session_state.editing_id = tx.id
                _rerun()
            if delete_col.button("🗑️", key=f"delete_{tx.id}"):
                tracker.delete_transaction(tx.id)
                _rerun()


def render_analytics(tracker: FinanceTracker) -> None:
    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(viz.create_monthly_expense_chart(tracker.monthly_series()), use_container_width=True)
    with col2:
        st.plotly_chart(viz.create_category_pie_chart(tracker.category_breakdown()), use_container_width=True)


def render_budgets(tracker: FinanceTracker) -> None:
    st.subheader("Set Budget")
    available = tracker.available_categories()
    with st.form('budget_form', clear_on_submit=True):
        category = st.selectbox(
            "Category", [c.id for c in available],
            format_func=lambda c: f"{get_category(c).icon} {get_category(c).name}",
        )
        amount = st.number_input("Monthly Budget ($)", min_value=0.0, step=0.01)
        submitted = st.form_submit_button("Add Budget", disabled=not available)
    if submitted:
        if tracker.add_budget(category, amount) is None:
            st.warning("Pick a category and enter a positive amount.")
        else:
            _rerun()

    st.subheader("Budget Overview")
    rows = tracker.analytics().budget_overview()
    if not rows:
        st.info("No budgets set yet. Create your first budget above!")
    for row in rows:
        info, delete_col = st.columns([8, 1])
        with info:
            status = "⚠️ Over Budget" if row['over_budget'] else ""
            st.markdown(
                f"{row['icon']} **{row['name']}** "
                f"{escape_dollar_for_markdown(row['spent'])} / {escape_dollar_for_markdown(row['amount'])} {status}"
            )
            st.progress(min(row['percentage_used'] / 100, 1.0))
            if row['over_budget']:
                st.caption(f"{format_percentage(row['percentage_used'])} used · {format_currency(-row['remaining'])} over budget")
            else:
                st.caption(f"{format_percentage(row['percentage_used'])} used · {format_currency(row['remaining'])} remaining")
        if delete_col.button("🗑️", key=f"delete_budget_{row['category']}"):
            tracker.delete_budget(row['category'])
            _rerun()


def insight_markdown(insight: Insight) -> str:
    """Markdown for one insight, with dollar signs escaped so amounts are not read as LaTeX."""
    return f"**{insight.title}** · {insight.description}".replace("$", "\\$")


def render_insights(tracker: FinanceTracker) -> None:
    st.subheader("💡 Financial Insights")
    insights = tracker.insights()
    if not insights:
        st.info("Add more transactions to get personalized insights about your spending patterns.")
    for insight in insights:
        INSIGHT_RENDERERS.get(insight.kind, st.info)(insight_markdown(insight))


def main() -> None:
    """Entry point for the Streamlit app."""
    configure_logging()
    ensure_data_directories()
    st.set_page_config(page_title="Personal Finance Tracker", page_icon="💰", layout="wide")
    st.title("Personal Finance Tracker")
    st.markdown("Take control of your finances with tracking, budgets and insights.")

    tracker = get_tracker()
    dashboard_tab, transactions_tab, analytics_tab, budgets_tab, insights_tab = st.tabs([
        "Dashboard", "Transactions", "Analytics", "Budgets", "Insights",
    ])
    with dashboard_tab:
        render_dashboard(tracker)
    with transactions_tab:
        render_transactions(tracker)
    with analytics_tab:
        render_analytics(tracker)
    with budgets_tab:
        render_budgets(tracker)
    with insights_tab:
        render_insights(tracker)


if __name__ == "__main__":
    main()

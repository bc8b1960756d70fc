"""Plotly visualisation helpers for the finance tracker.

Each function accepts a DataFrame produced by :mod:`finance_tracker.analytics`
and returns a `plotly.graph_objects.Figure` that Streamlit can render via
``st.plotly_chart``.  Empty inputs produce an empty figure titled
"No data to display" rather than raising.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

EMPTY_TITLE = "No data to display"


def _empty_figure(title: str = EMPTY_TITLE) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_monthly_expense_chart(series: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Generate a bar chart of expense totals per month.

    Parameters
    ----------
    series : pandas.DataFrame
        Output of :meth:`FinanceAnalytics.monthly_expense_series` with
        ``label`` and ``amount`` columns, oldest month first.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart of months vs amounts.
    """
    if series.empty:
        return _empty_figure()
    fig = px.bar(series, x="label", y="amount")
    fig.update_layout(
        title=title or "Monthly Expenses",
        xaxis_title="Month",
        yaxis_title="Amount",
        yaxis_tickprefix="$",
    )
    return fig


def create_category_pie_chart(totals: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Generate a pie chart of expenses by category.

    Parameters
    ----------
    totals : pandas.DataFrame
        Output of :meth:`FinanceAnalytics.category_totals` with ``name``,
        ``color`` and ``amount`` columns.
    title : str, optional
        Title for the chart.

    Returns
    -------
    plotly.graph_objects.Figure
        Pie chart coloured with each category's registry colour.
    """
    if totals.empty:
        return _empty_figure()
    colors = dict(zip(totals["name"], totals["color"]))
    fig = px.pie(totals, names="name", values="amount", color="name", color_discrete_map=colors)
    fig.update_traces(textinfo="label+percent")
    fig.update_layout(title=title or "Expenses by Category")
    return fig

from datetime import date

from finance_tracker import visualization as viz
from finance_tracker.analytics import FinanceAnalytics
from finance_tracker.models import Transaction


def _analytics():
    return FinanceAnalytics([
        Transaction('1', 40.0, '2024-02-05', '', 'food', 'expense'),
        Transaction('2', 60.0, '2024-03-05', '', 'travel', 'expense'),
    ], today=date(2024, 3, 15))


def test_empty_inputs_produce_placeholder_figures():
    empty = FinanceAnalytics([])
    assert viz.create_monthly_expense_chart(empty.monthly_expense_series()).layout.title.text == viz.EMPTY_TITLE
    assert viz.create_category_pie_chart(empty.category_totals()).layout.title.text == viz.EMPTY_TITLE


def test_monthly_chart_uses_month_labels():
    fig = viz.create_monthly_expense_chart(_analytics().monthly_expense_series())
    assert list(fig.data[0].x) == ['Feb 2024', 'Mar 2024']
    assert fig.layout.title.text == 'Monthly Expenses'


def test_pie_chart_has_one_slice_per_category():
    fig = viz.create_category_pie_chart(_analytics().category_totals())
    labels = [label for trace in fig.data for label in trace.labels]
    assert sorted(labels) == ['Food & Dining', 'Travel']

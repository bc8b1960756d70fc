import pytest

from finance_tracker.budgets import BudgetStore, spent_for_category
from finance_tracker.models import Budget, Transaction


def _transactions():
    return [
        Transaction('1', 100.0, '2024-03-05', 'Dinner', 'food', 'expense'),
        Transaction('2', 50.0, '2024-02-10', 'Lunch', 'food', 'expense'),
        Transaction('3', 30.0, '2024-03-12', 'Refund', 'food', 'income'),
        Transaction('4', 20.0, '2024-03-15', 'Bus', 'transport', 'expense'),
    ]


def test_add_initializes_spent_to_zero():
    store = BudgetStore()
    budget = store.add('food', 80)
    assert budget == Budget('food', 80.0, 0.0)


def test_add_rejects_duplicates_and_non_positive_amounts():
    store = BudgetStore()
    store.add('food', 80)
    with pytest.raises(ValueError):
        store.add('food', 120)
    with pytest.raises(ValueError):
        store.add('travel', 0)
    with pytest.raises(ValueError):
        store.add('travel', -5)
    assert store.categories() == ['food']


def test_delete_is_noop_when_absent():
    store = BudgetStore()
    store.add('food', 80)
    assert store.delete('travel') is False
    assert store.delete('food') is True
    assert len(store) == 0


def test_recompute_counts_only_current_month_expenses_in_category():
    store = BudgetStore()
    store.add('food', 80)
    store.add('travel', 500)

    store.recompute(_transactions(), '2024-03')

    assert store.get('food').spent == 100.0
    assert store.get('travel').spent == 0.0
    assert store.get('food').is_over_budget


def test_recompute_is_idempotent():
    store = BudgetStore()
    store.add('food', 80)
    first = store.recompute(_transactions(), '2024-03')
    second = store.recompute(_transactions(), '2024-03')
    assert first == second


def test_recompute_reflects_removed_transactions():
    store = BudgetStore()
    store.add('food', 80)
    store.recompute(_transactions(), '2024-03')
    store.recompute([], '2024-03')
    assert store.get('food').spent == 0.0


def test_spent_for_category_uses_prefix_match():
    assert spent_for_category(_transactions(), 'food', '2024-02') == 50.0
    assert spent_for_category(_transactions(), 'food', '2023') == 0.0


def test_budget_status_helpers():
    near = Budget('food', 100.0, 90.0)
    at_limit = Budget('food', 100.0, 100.0)
    boundary = Budget('food', 100.0, 80.0)
    over = Budget('food', 100.0, 120.0)

    assert near.is_near_limit() and not near.is_over_budget
    assert at_limit.is_near_limit()
    assert not boundary.is_near_limit()
    assert over.is_over_budget and not over.is_near_limit()
    assert over.remaining == -20.0
    assert near.percentage_used == pytest.approx(90.0)


def test_total_amount_and_lookup():
    store = BudgetStore([Budget('food', 80.0), Budget('bills', 120.0), Budget('food', 10.0)])
    assert store.total_amount() == 200.0
    assert store.get('bills').amount == 120.0
    assert store.get('travel') is None

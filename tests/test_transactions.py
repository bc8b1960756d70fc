from finance_tracker.models import Transaction
from finance_tracker.transactions import TransactionStore


def _data(**overrides):
    data = {
        'amount': 25.0,
        'date': '2024-03-02',
        'description': 'Groceries',
        'category': 'food',
        'type': 'expense',
    }
    data.update(overrides)
    return data


def _fixed_ids():
    return TransactionStore(id_factory=lambda: '1000')


def test_add_assigns_unique_ids_even_when_timestamps_repeat():
    store = _fixed_ids()
    first = store.add(_data())
    second = store.add(_data(amount=10))
    assert first.id == '1000'
    assert second.id == '1001'
    assert len(store) == 2


def test_add_then_delete_restores_previous_content():
    store = _fixed_ids()
    store.add(_data())
    before = store.list()
    added = store.add(_data(description='Coffee'))
    assert store.delete(added.id) is True
    assert store.list() == before


def test_edit_preserves_id_and_leaves_others_untouched():
    store = _fixed_ids()
    target = store.add(_data())
    other = store.add(_data(description='Bus', category='transport'))

    updated = store.edit(target.id, _data(amount=99.5, description='Dinner'))

    assert updated.id == target.id
    assert store.get(target.id).amount == 99.5
    assert store.get(other.id) == other


def test_edit_and_delete_unknown_id_are_noops():
    store = _fixed_ids()
    store.add(_data())
    snapshot = store.list()
    assert store.edit('missing', _data(amount=1)) is None
    assert store.delete('missing') is False
    assert store.list() == snapshot


def test_list_returns_a_copy():
    store = _fixed_ids()
    store.add(_data())
    listed = store.list()
    listed.clear()
    assert len(store) == 1


def test_sorted_by_date_and_recent():
    store = TransactionStore([
        Transaction('a', 1.0, '2024-01-05', '', 'food', 'expense'),
        Transaction('b', 2.0, '2024-03-01', '', 'food', 'expense'),
        Transaction('c', 3.0, '2024-02-10', '', 'food', 'income'),
    ])
    assert [tx.id for tx in store.sorted_by_date()] == ['b', 'c', 'a']
    assert [tx.id for tx in store.recent(2)] == ['b', 'c']


def test_seed_drops_duplicate_ids():
    tx = Transaction('a', 1.0, '2024-01-05', '', 'food', 'expense')
    store = TransactionStore([tx, tx])
    assert len(store) == 1
    assert 'a' in store

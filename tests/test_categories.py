from finance_tracker.categories import (
    CATEGORIES,
    FALLBACK_CATEGORY,
    available_categories,
    category_ids,
    find_category,
    get_category,
)


def test_registry_has_nine_categories_ending_with_other():
    assert len(CATEGORIES) == 9
    assert CATEGORIES[-1].id == 'other'
    assert len(set(category_ids())) == 9


def test_get_category_falls_back_to_other():
    assert get_category('food').name == 'Food & Dining'
    assert get_category('crypto') is FALLBACK_CATEGORY
    assert find_category('crypto') is None


def test_available_categories_excludes_budgeted():
    remaining = available_categories(['food', 'travel'])
    ids = [c.id for c in remaining]
    assert 'food' not in ids
    assert 'travel' not in ids
    assert len(ids) == 7
    assert ids[0] == 'transport'

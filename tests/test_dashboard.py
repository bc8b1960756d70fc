from finance_tracker.analytics import INFO, WARNING, Insight
from finance_tracker.dashboard import insight_markdown
from finance_tracker.formatting import format_currency


def test_insight_amounts_are_escaped_for_markdown():
    insight = Insight(
        INFO,
        'Top Spending Category',
        f"You spent the most on Food & Dining ({format_currency(100)}) this month",
    )
    text = insight_markdown(insight)

    assert text.startswith('**Top Spending Category** · ')
    assert '\\$100.00' in text
    assert '$' not in text.replace('\\$', '')


def test_insight_with_several_amounts():
    insight = Insight(WARNING, 'Over Budget Alert', 'Spent $120.00 of $80.00')
    assert insight_markdown(insight).endswith('Spent \\$120.00 of \\$80.00')

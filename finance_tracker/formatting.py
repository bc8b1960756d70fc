"""Formatting utilities for currency, percentages and month labels."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Union

NOT_AVAILABLE = "N/A"


def escape_dollar_for_markdown(amount: float) -> str:
    """Format a dollar amount and escape the dollar sign for markdown rendering.

    Streamlit markdown treats ``$`` as a LaTeX math delimiter, so the sign
    has to be escaped when an amount is embedded in markdown text.

    Example:
        >>> escape_dollar_for_markdown(1234.56)
        '\\\\$1,234.56'
    """
    return format_currency(amount).replace("$", "\\$")


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with thousands separators.

    Negative amounts keep the minus sign in front of the dollar sign.

    Example:
        >>> format_currency(1234.5)
        '$1,234.50'
        >>> format_currency(-20)
        '-$20.00'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    formatted = f"{abs(amount):,.2f}"
    prefix = "-" if amount < 0 else ""
    return f"{prefix}${formatted}" if include_sign else f"{prefix}{formatted}"


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format a percentage, rendering NaN and infinities as ``N/A``.

    Example:
        >>> format_percentage(42.123)
        '42.1%'
        >>> format_percentage(float('nan'))
        'N/A'
    """
    if value is None or not math.isfinite(value):
        return NOT_AVAILABLE
    return f"{value:.{decimals}f}%"


def month_label(month: str) -> str:
    """Turn a "YYYY-MM" key into a short label such as "Jan 2024".

    Keys that do not parse are returned unchanged.
    """
    try:
        return datetime.strptime(month, "%Y-%m").strftime("%b %Y")
    except ValueError:
        return month


def pluralize_category(count: int) -> str:
    """Return "1 category" / "3 categories"."""
    return f"{count} categor{'y' if count == 1 else 'ies'}"

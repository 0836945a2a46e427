"""
Utility functions for freight record manipulation and formatting.

Provides helpers for:
- Date parsing (multiple formats supported)
- Currency formatting
- Search query matching against record fields
- Paging arithmetic
"""

import math
from datetime import date, datetime
from typing import Iterable


def parse_date(value: str | date | None) -> date | None:
    """
    Parse a date string to a date object.

    Accepts ISO dates (``2024-12-25``), ISO timestamps as returned by the
    backend (``2024-12-25T00:00:00.000Z``) and the d/m/Y form used on
    printed consignment notes (``25/12/2024``).

    Args:
        value: Date string, date, or None.

    Returns:
        date object if parsing succeeds, None otherwise.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value:
        value = value.strip()
    if not value:
        return None

    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        pass

    try:
        return datetime.strptime(value, "%d/%m/%Y").date()
    except ValueError:
        pass

    return None


def format_currency(value: float, currency: str = "INR") -> str:
    """
    Format a currency amount with the currency code prefix.

    Args:
        value: Numeric amount to format.
        currency: Currency code.

    Returns:
        Formatted string like 'INR 1,234.56'.
    """
    return f"{currency} {value:,.2f}"


def matches_query(terms: Iterable[str], query: str) -> bool:
    """
    Check if any searchable term contains the query.

    Performs case-insensitive substring matching.

    Args:
        terms: Lower-cased searchable terms of a record.
        query: Search query string.

    Returns:
        True if query matches any term, or if query is empty.
    """
    normalized = " ".join(query.split()).lower()
    if not normalized:
        return True
    return any(normalized in term for term in terms)


def page_count(total_items: int, page_size: int) -> int:
    """Return the number of pages needed to show total_items."""
    if total_items <= 0 or page_size <= 0:
        return 0
    return math.ceil(total_items / page_size)

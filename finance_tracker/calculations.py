"""Pure helpers for money, balances and month keys.

Everything here is stateless and operates on in-memory sequences of
:class:`~finance_tracker.models.Record`.  Dates are ISO ``YYYY-MM-DD``
strings; a *month key* is the ``YYYY-MM`` prefix of such a date.
"""

from __future__ import annotations

import math
from datetime import date as _date
from typing import Any, Iterable, List, Optional

from .models import Record

PLACEHOLDER = "—"


def format_money(value: Any) -> str:
    """Format an amount as ``$1234.50``.

    Non-numeric and non-finite input (``None``, ``NaN``, infinities)
    produce :data:`PLACEHOLDER` instead of a number.

    Example:
        >>> format_money(12.5)
        '$12.50'
        >>> format_money(float('nan'))
        '—'
    """
    if value is None or isinstance(value, bool):
        return PLACEHOLDER
    try:
        number = float(value)
    except (TypeError, ValueError):
        return PLACEHOLDER
    if not math.isfinite(number):
        return PLACEHOLDER
    return f"${number:.2f}"


def type_label(record_type: str) -> str:
    return "Income" if record_type == "income" else "Expense"


def calc_balance(records: Iterable[Record]) -> float:
    """Sum of income amounts minus sum of expense amounts (unrounded)."""
    balance = 0.0
    for record in records:
        balance += record.signed_amount
    return balance


def to_iso_date(value: Optional[_date] = None) -> str:
    """Return ``YYYY-MM-DD`` for ``value`` (today when omitted)."""
    return (value or _date.today()).isoformat()


def current_month_key(today: Optional[_date] = None) -> str:
    return to_iso_date(today)[:7]


def month_key_from_iso(date_str: Optional[str]) -> str:
    """Return the ``YYYY-MM`` prefix of an ISO date, or ``""``."""
    if not date_str or len(date_str) < 7:
        return ""
    return date_str[:7]


def is_same_month(date_str: Optional[str], year: int, month_index: int) -> bool:
    """Check a date against a calendar year and zero-based month."""
    if not date_str:
        return False
    try:
        parsed = _date.fromisoformat(date_str)
    except ValueError:
        return False
    return parsed.year == year and parsed.month - 1 == month_index


def get_month_options(records: Iterable[Record]) -> List[str]:
    """Distinct month keys found in ``records``, newest first."""
    keys = {month_key_from_iso(record.date) for record in records}
    keys.discard("")
    return sorted(keys, reverse=True)

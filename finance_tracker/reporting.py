"""Monthly aggregation and list helpers.

This module contains the functions behind the Home, Records and Stats pages:
month filtering, income/expense totals, per-category expense sums, the top
expense category, and the filters and orderings used by the record tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as _date
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .calculations import (
    PLACEHOLDER,
    current_month_key,
    format_money,
    get_month_options,
    is_same_month,
    month_key_from_iso,
    type_label,
)
from .models import Category, Record

def category_name(categories: Iterable[Category], category_id: str) -> str:
    """Display name for ``category_id``, falling back to the id itself."""
    for category in categories:
        if category.id == category_id:
            return category.name
    return category_id or PLACEHOLDER


def records_for_month(records: Iterable[Record], month_key: str) -> List[Record]:
    return [r for r in records if month_key_from_iso(r.date) == month_key]


def month_totals(records: Iterable[Record]) -> Tuple[float, float]:
    """Return ``(income, expense)`` sums for ``records``."""
    income = 0.0
    expense = 0.0
    for record in records:
        if record.is_income:
            income += record.amount
        elif record.is_expense:
            expense += record.amount
    return income, expense


def current_month_totals(records: Iterable[Record], today: Optional[_date] = None) -> Tuple[float, float]:
    today = today or _date.today()
    in_month = [r for r in records if is_same_month(r.date, today.year, today.month - 1)]
    return month_totals(in_month)


def expense_totals_by_category(records: Iterable[Record]) -> pd.Series:
    """Sum expense amounts per category id.

    The result is ordered by descending amount; equal amounts keep ascending
    category id order, so the ranking does not depend on record order.
    """
    rows = [(r.category, r.amount) for r in records if r.is_expense]
    if not rows:
        return pd.Series(dtype=float, name="amount")
    frame = pd.DataFrame(rows, columns=["category", "amount"])
    totals = frame.groupby("category", as_index=False)["amount"].sum()
    totals = totals.sort_values(["amount", "category"], ascending=[False, True])
    return totals.set_index("category")["amount"]


def top_expense_category(records: Iterable[Record]) -> Optional[Tuple[str, float]]:
    """Category id and amount with the largest expense total, if any."""
    totals = expense_totals_by_category(records)
    if totals.empty:
        return None
    return str(totals.index[0]), float(totals.iloc[0])


@dataclass(frozen=True)
class MonthSummary:
    month_key: str
    income: float
    expense: float
    top_category_id: Optional[str] = None
    top_category_name: Optional[str] = None
    top_amount: float = 0.0

    @property
    def top_label(self) -> str:
        if self.top_category_id is None:
            return PLACEHOLDER
        return f"{self.top_category_name} ({format_money(self.top_amount)})"

    def describe(self) -> str:
        return (
            f"Month {self.month_key} | Income: {format_money(self.income)}"
            f" | Expense: {format_money(self.expense)} | Top expense: {self.top_label}"
        )


def summarize_month(
    records: Iterable[Record],
    month_key: str,
    categories: Sequence[Category] = (),
) -> MonthSummary:
    """Build the income/expense/top-category summary for one month."""
    in_month = records_for_month(records, month_key)
    income, expense = month_totals(in_month)
    top = top_expense_category(in_month)
    if top is None:
        return MonthSummary(month_key, income, expense)
    top_id, top_amount = top
    return MonthSummary(
        month_key=month_key,
        income=income,
        expense=expense,
        top_category_id=top_id,
        top_category_name=category_name(categories, top_id),
        top_amount=top_amount,
    )


def stats_month_options(records: Iterable[Record], today: Optional[_date] = None) -> List[str]:
    """Month options for the Stats page; always includes the current month."""
    options = set(get_month_options(records))
    options.add(current_month_key(today))
    return sorted(options, reverse=True)


def filter_records(
    records: Iterable[Record],
    month_key: str = "",
    record_type: str = "",
    category_id: str = "",
) -> List[Record]:
    """Apply the Records page filters. Empty values match everything."""
    result = []
    for record in records:
        if month_key and month_key_from_iso(record.date) != month_key:
            continue
        if record_type and record.type != record_type:
            continue
        if category_id and record.category != category_id:
            continue
        result.append(record)
    return result


def _id_order(record: Record) -> int:
    try:
        return int(record.id)
    except ValueError:
        return -1


def newest_first(records: Iterable[Record]) -> List[Record]:
    """Sort by numeric id (creation time in ms), newest first."""
    return sorted(records, key=_id_order, reverse=True)


def recent_records(records: Iterable[Record], limit: int = 5) -> List[Record]:
    return newest_first(records)[:limit]


def records_frame(records: Iterable[Record], categories: Sequence[Category] = ()) -> pd.DataFrame:
    """Tabular view of ``records`` for display."""
    rows = [
        {
            "ID": r.id,
            "Date": r.date or PLACEHOLDER,
            "Type": type_label(r.type),
            "Category": category_name(categories, r.category),
            "Amount": format_money(r.amount),
            "Note": r.note or PLACEHOLDER,
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=["ID", "Date", "Type", "Category", "Amount", "Note"])

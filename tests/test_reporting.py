"""Tests for monthly aggregation and list helpers."""

from __future__ import annotations

from datetime import date

import pandas as pd

from finance_tracker import reporting as rp
from finance_tracker.calculations import PLACEHOLDER
from finance_tracker.models import Category, Record

CATEGORIES = [Category("food", "Food"), Category("rent", "Rent"), Category("salary", "Salary")]


def _sample_records():
    return [
        Record("100", "income", "salary", 3000.0, "2024-03-01"),
        Record("101", "expense", "rent", 1200.0, "2024-03-02"),
        Record("102", "expense", "food", 45.5, "2024-03-05"),
        Record("103", "expense", "food", 30.0, "2024-03-20"),
        Record("104", "expense", "food", 99.0, "2024-02-27"),
        Record("105", "income", "salary", 3000.0, "2024-02-01"),
    ]


def test_records_for_month():
    march = rp.records_for_month(_sample_records(), "2024-03")
    assert [r.id for r in march] == ["100", "101", "102", "103"]


def test_month_totals():
    income, expense = rp.month_totals(rp.records_for_month(_sample_records(), "2024-03"))
    assert income == 3000.0
    assert expense == 1275.5


def test_expense_totals_by_category_sorted_descending():
    totals = rp.expense_totals_by_category(rp.records_for_month(_sample_records(), "2024-03"))
    assert list(totals.index) == ["rent", "food"]
    assert totals["food"] == 75.5


def test_expense_totals_ignores_income_and_handles_empty():
    income_only = [Record("1", "income", "salary", 10.0, "2024-03-01")]
    assert rp.expense_totals_by_category(income_only).empty
    assert rp.expense_totals_by_category([]).empty


def test_top_category_tie_breaks_by_id_regardless_of_order():
    records = [
        Record("1", "expense", "transport", 50.0, "2024-03-01"),
        Record("2", "expense", "food", 50.0, "2024-03-02"),
    ]
    assert rp.top_expense_category(records) == ("food", 50.0)
    assert rp.top_expense_category(list(reversed(records))) == ("food", 50.0)


def test_summarize_month_with_expenses():
    summary = rp.summarize_month(_sample_records(), "2024-03", CATEGORIES)
    assert summary.income == 3000.0
    assert summary.expense == 1275.5
    assert summary.top_category_id == "rent"
    assert summary.top_label == "Rent ($1200.00)"
    assert summary.describe() == (
        "Month 2024-03 | Income: $3000.00 | Expense: $1275.50 | Top expense: Rent ($1200.00)"
    )


def test_summarize_month_without_expenses():
    summary = rp.summarize_month(_sample_records(), "2023-12", CATEGORIES)
    assert summary.income == 0.0
    assert summary.expense == 0.0
    assert summary.top_label == PLACEHOLDER


def test_summary_falls_back_to_category_id():
    records = [Record("1", "expense", "deleted-cat", 5.0, "2024-03-01")]
    summary = rp.summarize_month(records, "2024-03", CATEGORIES)
    assert summary.top_label == "deleted-cat ($5.00)"


def test_stats_month_options_include_current_month():
    options = rp.stats_month_options(_sample_records(), today=date(2024, 5, 10))
    assert options == ["2024-05", "2024-03", "2024-02"]
    assert rp.stats_month_options([], today=date(2024, 5, 10)) == ["2024-05"]


def test_filter_records():
    records = _sample_records()
    assert len(rp.filter_records(records)) == 6
    assert [r.id for r in rp.filter_records(records, month_key="2024-02")] == ["104", "105"]
    assert [r.id for r in rp.filter_records(records, record_type="income")] == ["100", "105"]
    assert [r.id for r in rp.filter_records(records, "2024-03", "expense", "food")] == ["102", "103"]


def test_newest_first_and_recent():
    records = _sample_records()
    assert [r.id for r in rp.newest_first(records)] == ["105", "104", "103", "102", "101", "100"]
    assert [r.id for r in rp.recent_records(records, limit=2)] == ["105", "104"]


def test_current_month_totals():
    income, expense = rp.current_month_totals(_sample_records(), today=date(2024, 2, 15))
    assert (income, expense) == (3000.0, 99.0)


def test_category_name():
    assert rp.category_name(CATEGORIES, "food") == "Food"
    assert rp.category_name(CATEGORIES, "unknown") == "unknown"
    assert rp.category_name(CATEGORIES, "") == PLACEHOLDER


def test_records_frame():
    frame = rp.records_frame(_sample_records()[:2], CATEGORIES)
    assert isinstance(frame, pd.DataFrame)
    assert list(frame.columns) == ["ID", "Date", "Type", "Category", "Amount", "Note"]
    assert frame.loc[1, "Category"] == "Rent"
    assert frame.loc[1, "Amount"] == "$1200.00"
    assert frame.loc[0, "Note"] == PLACEHOLDER
    assert rp.records_frame([]).empty

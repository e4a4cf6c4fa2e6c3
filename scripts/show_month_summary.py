#!/usr/bin/env python3
"""Print the income/expense summary and category breakdown for a month."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finance_tracker import config
from finance_tracker.calculations import current_month_key, format_money
from finance_tracker.logger import setup_logger
from finance_tracker.reporting import (
    category_name,
    expense_totals_by_category,
    records_for_month,
    summarize_month,
)
from finance_tracker.store import FileBackend, TrackerStore


def main(month: Optional[str] = None, data_dir: Optional[Path] = None) -> None:
    setup_logger(level=config.LOG_LEVEL)
    store = TrackerStore(FileBackend(data_dir or config.DATA_DIR))
    records = store.load_records()
    categories = store.load_categories()
    month = month or current_month_key()

    print(summarize_month(records, month, categories).describe())

    totals = expense_totals_by_category(records_for_month(records, month))
    if totals.empty:
        print("\nNo expenses recorded for this month.")
        return
    print("\nExpenses by category:")
    for category_id, amount in totals.items():
        print(f"  {category_name(categories, category_id):<20} {format_money(amount):>12}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Show a monthly finance summary.')
    parser.add_argument('--month', help='Month key YYYY-MM (defaults to the current month)')
    parser.add_argument('--data-dir', type=Path, help='Override the data directory')
    args = parser.parse_args()
    main(month=args.month, data_dir=args.data_dir)

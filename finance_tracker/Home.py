"""Main entry point for the Streamlit multi-page app.

Shows this month's income and expense, the overall balance, and the five
most recent records.  Pages in the pages/ directory appear in the sidebar.
"""

from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from finance_tracker.calculations import calc_balance, format_money
from finance_tracker.reporting import current_month_totals, recent_records
from finance_tracker.shared_ui import (
    flash,
    get_store,
    render_flash,
    render_records_table,
    render_sidebar,
)


def main() -> None:
    st.set_page_config(page_title="Finance Tracker", page_icon="💰", layout="wide")
    store = get_store()
    # Seeds the default categories on first run
    categories = store.load_categories()
    records = store.load_records()

    render_sidebar(store)
    st.header("🏠 This Month")
    render_flash()

    income, expense = current_month_totals(records)
    col1, col2, col3 = st.columns(3)
    col1.metric("Income", format_money(income))
    col2.metric("Expense", format_money(expense))
    col3.metric("Balance", format_money(calc_balance(records)))

    st.subheader("Recent records")
    deleted = render_records_table(
        recent_records(records),
        categories,
        store,
        empty_message="No records yet. Go to the Add page to create one.",
        key_prefix="home",
    )
    if deleted:
        flash("Deleted.")
        st.rerun()


if __name__ == "__main__":
    main()

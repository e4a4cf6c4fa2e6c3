"""Shared Streamlit helpers used by every page.

Provides the per-session store, flash messages that survive ``st.rerun()``,
the sidebar balance, and the record table with delete buttons.
"""

from __future__ import annotations

from typing import Optional, Sequence

import streamlit as st

from . import config
from .calculations import PLACEHOLDER, calc_balance, format_money, type_label
from .logger import setup_logger
from .models import Category, Record
from .records import RecordManager
from .reporting import category_name
from .store import FileBackend, TrackerStore

STORE_KEY = "tracker_store"
FLASH_KEY = "tracker_flash"


def get_store() -> TrackerStore:
    """Return the store for this session, creating it on first use."""
    if STORE_KEY not in st.session_state:
        setup_logger(level=config.LOG_LEVEL)
        config.ensure_data_directories()
        st.session_state[STORE_KEY] = TrackerStore(FileBackend(config.DATA_DIR))
    return st.session_state[STORE_KEY]


def flash(text: str, is_error: bool = False) -> None:
    """Queue a message to show after the next rerun."""
    st.session_state[FLASH_KEY] = (text, is_error)


def render_flash() -> None:
    message = st.session_state.pop(FLASH_KEY, None)
    if not message:
        return
    text, is_error = message
    if is_error:
        st.error(text)
    else:
        st.success(text)


def render_sidebar(store: TrackerStore) -> None:
    """Show the overall balance in the sidebar."""
    st.sidebar.header("💰 Finance Tracker")
    balance = calc_balance(store.load_records())
    st.sidebar.metric("Balance", format_money(balance))
    st.sidebar.caption(f"Data directory: {config.get_data_dir()}")


def render_records_table(
    records: Sequence[Record],
    categories: Sequence[Category],
    store: TrackerStore,
    empty_message: str,
    key_prefix: str,
) -> Optional[str]:
    """Render records as rows with a delete button each.

    Returns the id of a deleted record, if any; the caller reruns the page.
    """
    if not records:
        st.info(empty_message)
        return None

    header = st.columns([1.2, 1, 1.4, 1.2, 2.4, 0.8])
    for col, label in zip(header, ["Date", "Type", "Category", "Amount", "Note", ""]):
        col.markdown(f"**{label}**")

    manager = RecordManager(store)
    for record in records:
        cols = st.columns([1.2, 1, 1.4, 1.2, 2.4, 0.8])
        cols[0].write(record.date or PLACEHOLDER)
        cols[1].write(type_label(record.type))
        cols[2].write(category_name(categories, record.category))
        cols[3].write(format_money(record.amount).replace("$", "\\$"))
        cols[4].write(record.note or PLACEHOLDER)
        if cols[5].button("Delete", key=f"{key_prefix}_delete_{record.id}"):
            manager.delete_record(record.id)
            return record.id
    return None

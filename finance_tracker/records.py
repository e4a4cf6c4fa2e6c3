"""Record management - validating, adding and deleting entries."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

from .calculations import PLACEHOLDER, calc_balance, format_money, type_label
from .models import RECORD_TYPES, Record, RecordValidationError, is_iso_date
from .reporting import category_name
from .store import TrackerStore

logger = logging.getLogger(__name__)


@dataclass
class RecordDraft:
    """Unsaved form input for a new record.

    ``amount`` is whatever the form produced (number, text or ``None``).
    """

    type: str = "expense"
    category: str = ""
    amount: Any = None
    date: str = ""
    note: str = ""


def _parse_amount(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        return float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return math.nan


def _iso_timestamp(moment: datetime) -> str:
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class RecordManager:
    """Add and delete records on top of a :class:`TrackerStore`."""

    def __init__(self, store: TrackerStore):
        self.store = store

    def validate_draft(self, draft: RecordDraft) -> float:
        """Check a draft and return its amount rounded to cents.

        Raises:
            RecordValidationError: with a message suitable for the user.
        """
        if draft.type not in RECORD_TYPES:
            raise RecordValidationError("Please choose income or expense.")
        category = (draft.category or "").strip()
        if not category:
            raise RecordValidationError("Please select a category.")
        amount = _parse_amount(draft.amount)
        if math.isfinite(amount):
            amount = round(amount, 2)
        if not math.isfinite(amount) or amount <= 0:
            raise RecordValidationError("Amount must be a number greater than 0.")
        if not is_iso_date(draft.date):
            raise RecordValidationError("Please choose a date.")
        if all(c.id != category for c in self.store.load_categories()):
            raise RecordValidationError("Selected category does not exist.")
        return amount

    def _next_id(self, now: datetime, existing: set) -> str:
        candidate = int(now.timestamp() * 1000)
        while str(candidate) in existing:
            candidate += 1
        return str(candidate)

    def add_record(self, draft: RecordDraft, now: Optional[datetime] = None) -> Record:
        """Validate ``draft`` and append it to the stored records."""
        amount = self.validate_draft(draft)
        now = now or datetime.now(timezone.utc)
        records = self.store.load_records()
        record = Record(
            id=self._next_id(now, {r.id for r in records}),
            type=draft.type,
            category=draft.category.strip(),
            amount=amount,
            date=draft.date,
            note=(draft.note or "").strip(),
            created_at=_iso_timestamp(now),
        )
        records.append(record)
        self.store.save_records(records)
        logger.info("Added %s record %s (%s)", record.type, record.id, format_money(record.amount))
        return record

    def delete_record(self, record_id: str) -> bool:
        """Remove a record by id. Returns False if it did not exist."""
        records = self.store.load_records()
        remaining = [r for r in records if r.id != record_id]
        if len(remaining) == len(records):
            return False
        self.store.save_records(remaining)
        logger.info("Deleted record %s", record_id)
        return True

    def estimate_balance(self, draft: RecordDraft) -> Tuple[float, bool]:
        """Balance after saving ``draft``.

        Returns ``(balance, True)`` when the draft is valid, otherwise the
        current balance and ``False``.
        """
        current = calc_balance(self.store.load_records())
        try:
            amount = self.validate_draft(draft)
        except RecordValidationError:
            return current, False
        return (current + amount if draft.type == "income" else current - amount), True

    def preview_text(self, draft: RecordDraft) -> str:
        categories = self.store.load_categories()
        category = category_name(categories, draft.category) if draft.category else PLACEHOLDER
        amount = _parse_amount(draft.amount)
        parts = [
            type_label(draft.type),
            category,
            format_money(amount) if math.isfinite(amount) else PLACEHOLDER,
            draft.date or PLACEHOLDER,
            f"Note: {(draft.note or '').strip() or PLACEHOLDER}",
        ]
        return " | ".join(parts)

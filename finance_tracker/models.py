"""Record and category value types.

Both types are immutable dataclasses that map one-to-one onto the persisted
JSON shape.  ``from_dict`` is the validation boundary used by the store:
anything that does not look like a well-formed entry raises
:class:`InvalidEntryError` and is dropped by the caller.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date as _date
from typing import Any, Dict, Mapping

RECORD_TYPES = ("income", "expense")

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_SLUG_SEPARATORS = re.compile(r"[^a-z0-9]+")


class TrackerError(ValueError):
    """Base class for errors raised by the tracker."""


class InvalidEntryError(TrackerError):
    """A persisted entry could not be read as a record or category."""


class RecordValidationError(TrackerError):
    """User input for a new record was rejected."""


class CategoryValidationError(TrackerError):
    """User input for a new category was rejected."""


class CategoryConflictError(TrackerError):
    """A category cannot be deleted in the current state."""


def slugify(name: str) -> str:
    """Derive a URL-safe category id from a display name.

    Example:
        >>> slugify("  Eating Out & Bars ")
        'eating-out-bars'
    """
    slug = _SLUG_SEPARATORS.sub("-", str(name).strip().lower())
    return slug.strip("-")


def is_iso_date(value: Any) -> bool:
    """True for a real calendar date written as ``YYYY-MM-DD``."""
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        return False
    try:
        _date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _require_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidEntryError(f"missing or empty field {key!r}")
    return value


@dataclass(frozen=True)
class Category:
    id: str
    name: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: Any) -> "Category":
        if not isinstance(data, Mapping):
            raise InvalidEntryError("category entry is not an object")
        return cls(id=_require_str(data, "id"), name=_require_str(data, "name"))


@dataclass(frozen=True)
class Record:
    """A single income or expense entry.

    ``created_at`` is persisted under the ``createdAt`` key.
    """

    id: str
    type: str
    category: str
    amount: float
    date: str
    note: str = ""
    created_at: str = ""

    @property
    def is_income(self) -> bool:
        return self.type == "income"

    @property
    def is_expense(self) -> bool:
        return self.type == "expense"

    @property
    def signed_amount(self) -> float:
        return self.amount if self.is_income else -self.amount

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "category": self.category,
            "amount": self.amount,
            "date": self.date,
            "note": self.note,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Record":
        if not isinstance(data, Mapping):
            raise InvalidEntryError("record entry is not an object")

        record_type = data.get("type")
        if record_type not in RECORD_TYPES:
            raise InvalidEntryError(f"unknown record type {record_type!r}")

        amount = data.get("amount")
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise InvalidEntryError("amount is not a number")
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidEntryError(f"amount must be positive, got {amount!r}")

        date = _require_str(data, "date")
        if not is_iso_date(date):
            raise InvalidEntryError(f"date {date!r} is not a valid YYYY-MM-DD date")

        note = data.get("note") or ""
        created_at = data.get("createdAt") or ""
        return cls(
            id=_require_str(data, "id"),
            type=record_type,
            category=_require_str(data, "category"),
            amount=round(float(amount), 2),
            date=date,
            note=str(note),
            created_at=str(created_at),
        )

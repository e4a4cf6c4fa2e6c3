"""Persistence for records and categories.

The store keeps two independent collections, each serialized as a JSON array
under its own key.  Keys are resolved by a small backend object: on disk every
key is one ``<key>.json`` file inside the data directory, in memory it is a
plain dict.  Reads never raise for bad data; corrupt or missing payloads are
logged and replaced by an empty list (records) or the default categories.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from .config import DATA_DIR
from .models import Category, InvalidEntryError, Record

logger = logging.getLogger(__name__)

RECORDS_KEY = "finance_records_v1"
CATEGORIES_KEY = "finance_categories_v1"

DEFAULT_CATEGORIES: List[Category] = [
    Category("salary", "Salary"),
    Category("food", "Food"),
    Category("transport", "Transport"),
    Category("rent", "Rent"),
    Category("study", "Study"),
    Category("entertainment", "Entertainment"),
    Category("other", "Other"),
]

T = TypeVar("T")


class MemoryBackend:
    """Keeps raw serialized values in a dict."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, raw: str) -> None:
        self._items[key] = raw


class FileBackend:
    """Stores each key as ``<data_dir>/<key>.json``."""

    def __init__(self, data_dir: Optional[Path] = None) -> None:
        self.data_dir = Path(data_dir) if data_dir is not None else DATA_DIR
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def get_path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        target = self.get_path(key)
        if not target.exists():
            return None
        try:
            return target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", target, exc)
            return None

    def set_item(self, key: str, raw: str) -> None:
        target = self.get_path(key)
        # Write next to the target and swap it in so readers never see a partial file
        fd, tmp_name = tempfile.mkstemp(dir=str(self.data_dir), prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(raw)
            os.replace(tmp_name, target)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


def _safe_parse(raw: Optional[str], fallback: Any) -> Any:
    if not raw:
        return fallback
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError, ValueError) as exc:
        logger.warning("Discarding unparsable stored data: %s", exc)
        return fallback


def _parse_entries(payload: Any, parse: Callable[[Any], T], label: str) -> List[T]:
    if not isinstance(payload, list):
        if payload is not None:
            logger.warning("Stored %s are not a list; treating as empty", label)
        return []
    entries: List[T] = []
    for index, item in enumerate(payload):
        try:
            entries.append(parse(item))
        except InvalidEntryError as exc:
            logger.warning("Skipping malformed %s entry #%d: %s", label, index, exc)
    return entries


class TrackerStore:
    """Load and save the records and categories collections.

    Args:
        backend: Object exposing ``get_item(key)`` and ``set_item(key, raw)``.
            Defaults to a :class:`FileBackend` rooted at ``config.DATA_DIR``.
    """

    def __init__(self, backend: Any = None) -> None:
        self.backend = backend if backend is not None else FileBackend()

    def load_records(self) -> List[Record]:
        payload = _safe_parse(self.backend.get_item(RECORDS_KEY), [])
        return _parse_entries(payload, Record.from_dict, "records")

    def save_records(self, records: Iterable[Record]) -> None:
        data = [record.to_dict() for record in records]
        self.backend.set_item(RECORDS_KEY, json.dumps(data, ensure_ascii=False))
        logger.debug("Saved %d records", len(data))

    def load_categories(self) -> List[Category]:
        payload = _safe_parse(self.backend.get_item(CATEGORIES_KEY), None)
        categories = _parse_entries(payload, Category.from_dict, "categories")
        if categories:
            return categories
        logger.info("No stored categories; seeding %d defaults", len(DEFAULT_CATEGORIES))
        self.save_categories(DEFAULT_CATEGORIES)
        return list(DEFAULT_CATEGORIES)

    def save_categories(self, categories: Iterable[Category]) -> None:
        data = [category.to_dict() for category in categories]
        self.backend.set_item(CATEGORIES_KEY, json.dumps(data, ensure_ascii=False))
        logger.debug("Saved %d categories", len(data))

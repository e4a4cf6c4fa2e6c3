from __future__ import annotations

import pytest

from finance_tracker.store import MemoryBackend, TrackerStore


@pytest.fixture
def store() -> TrackerStore:
    return TrackerStore(MemoryBackend())

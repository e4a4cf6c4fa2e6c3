"""Configuration management for the finance tracker.

This module centralizes all configuration values including paths,
chart dimensions, and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base project root - assumes this file is in finance_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directory holding one JSON document per storage key
DATA_DIR = Path(os.getenv("FINTRACK_DATA_DIR", _PROJECT_ROOT / "data")).resolve()

LOG_LEVEL = os.getenv("FINTRACK_LOG_LEVEL", "INFO")

# Chart surface
MAX_CHART_WIDTH = 900
CHART_WIDTH = min(int(os.getenv("FINTRACK_CHART_WIDTH", MAX_CHART_WIDTH)), MAX_CHART_WIDTH)
CHART_HEIGHT = int(os.getenv("FINTRACK_CHART_HEIGHT", 360))


def ensure_data_directories() -> None:
    """Create the data directory if it doesn't exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def get_data_dir() -> str:
    """Get the data directory as a string."""
    return str(DATA_DIR)

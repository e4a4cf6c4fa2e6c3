"""Application logging setup.

Keeps formatter, level and handler configuration in one place so that the
Streamlit pages and scripts only need to call :func:`setup_logger` once.
Library modules log through ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import sys
from logging import Logger, StreamHandler
from typing import Dict, Final

LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(message)s"

_LOG_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logger(name: str = "finance_tracker", level: str = "INFO") -> Logger:
    """Create and configure the application logger.

    Args:
        name: Logger name, usually the package or calling module.
        level: Level name such as "DEBUG" or "error". Unknown values fall
            back to INFO.

    Returns:
        The configured logger.
    """
    log_level = _LOG_LEVELS.get(str(level).upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[StreamHandler(sys.stdout)],
        force=True,  # Streamlit reruns would otherwise stack handlers
    )

    return logging.getLogger(name)

"""Top-level package for the personal finance tracker.

The primary modules are:

* ``store`` – JSON persistence for records and categories
* ``calculations`` – money formatting, balances and month keys
* ``reporting`` – monthly summaries and record list helpers
* ``charts`` – bar/pie chart geometry and the Plotly adapter
* ``records`` / ``categories`` – add and delete flows with validation

To run the app from the command line you can execute:

```bash
streamlit run finance_tracker/Home.py
```

or ``python run_tracker.py`` from the project root.
"""

from .models import (  # noqa: F401  # re-exported for convenience
    Category,
    CategoryConflictError,
    CategoryValidationError,
    Record,
    RecordValidationError,
    TrackerError,
)
from .store import FileBackend, MemoryBackend, TrackerStore  # noqa: F401

__all__ = [
    "Category",
    "CategoryConflictError",
    "CategoryValidationError",
    "FileBackend",
    "MemoryBackend",
    "Record",
    "RecordValidationError",
    "TrackerError",
    "TrackerStore",
]

"""Configuration management for the finance tracker.

This module centralizes all configuration values including paths,
storage keys, aggregation defaults and environment variable overrides.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

# Base project root - assumes this file is in finance_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# Data directories
DATA_DIR = Path(os.getenv("FINTRACK_DATA_DIR", _PROJECT_ROOT / "data"))

# Key-value store file (stands in for the browser's local storage)
STORE_PATH = Path(
    os.getenv("FINTRACK_STORE_PATH", DATA_DIR / "local_storage.json")
).resolve()

# Keys under which each collection is serialized
TRANSACTIONS_KEY = "finance-transactions"
BUDGETS_KEY = "finance-budgets"

# Aggregation defaults
MONTHLY_SERIES_LENGTH = 6
NEAR_BUDGET_THRESHOLD = 0.8
RECENT_TRANSACTION_COUNT = 5

LOG_LEVEL = os.getenv("FINTRACK_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, STORE_PATH.parent]:
        directory.mkdir(parents=True, exist_ok=True)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the app entry points."""
    logging.basicConfig(level=(level or LOG_LEVEL), format=LOG_FORMAT)

"""
Design (config.py)
- Purpose: Centralize constants and configuration.
- Inputs: Environment variables (optionally from a .env file) for the few runtime overrides.
- Outputs: Constants (prices, ranges, tiers, storage keys, file names).
- Side effects: load_dotenv() populates os.environ from .env at import.
- Thread-safety: N/A (read-only constants).
"""

import os
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

# Unit price per item sold (dollars)
UNIT_PRICES: Dict[str, int] = {
    "locks": 45,
    "stocks": 30,
    "barrels": 25,
}

# Inclusive (min, max) allowed per field
UNIT_RANGES: Dict[str, Tuple[int, int]] = {
    "locks": (1, 70),
    "stocks": (1, 80),
    "barrels": (1, 90),
}

# Display labels, in validation order
FIELD_LABELS: Dict[str, str] = {
    "name": "Employee Name",
    "locks": "Locks",
    "stocks": "Stocks",
    "barrels": "Barrels",
}

# Progressive tiers: (upper bound of the slice, rate). None = no upper bound.
# A breakpoint belongs to the tier below it.
COMMISSION_TIERS: List[Tuple[Optional[float], float]] = [
    (1000, 0.10),   # first $1,000 -> 10%
    (1800, 0.15),   # next $800 -> 15%
    (None, 0.20),   # everything above $1,800 -> 20%
]

DEFAULT_EMPLOYEE_NAME = "Employee"

# Persistence: logical keys inside the key-value store, and the file holding them
ENTRIES_KEY = "entries"
ENTRY_COUNT_KEY = "entry_count"
HISTORY_FILENAME = "commission_history.json"
APP_DIR_NAME = "Commission Calculator"


def env_flag(name: str, default: bool) -> bool:
    """Read a true/false environment variable; unknown text falls back to default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    return default


def env_log_level(name: str, default: str = "INFO") -> str:
    """Read a logging level name; anything unrecognized falls back to default."""
    raw = (os.getenv(name) or "").strip().upper()
    if raw in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        return raw
    return default


# Clearing history resets the entry-id counter to zero (False = ids keep counting)
RESET_COUNTER_ON_CLEAR: bool = env_flag("COMMISSION_RESET_COUNTER_ON_CLEAR", True)

# Optional override for where the history file lives (resolved in storage module)
DATA_DIR: str = os.getenv("COMMISSION_DATA_DIR", "")

LOG_LEVEL: str = env_log_level("COMMISSION_LOG_LEVEL")

# maximum number of log lines kept in the Logs panel (oldest trimmed)
LOG_MAX_LINES = 1000

NOTIFICATION_TIMEOUT_SEC = 5

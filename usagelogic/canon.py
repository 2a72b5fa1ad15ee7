from __future__ import annotations
from typing import Final

# Raw row field names
DATE_FIELD: Final[str] = "Date"
MIN_FIELD: Final[str] = "Min"
MAX_FIELD: Final[str] = "Max"
TOTAL_FIELD: Final[str] = "Total"

# Interval columns are named like "12:15 AM"; case-sensitive match
MERIDIEM_MARKERS: Final[tuple[str, ...]] = ("AM", "PM")

# Footer/disclaimer rows embedded in utility exports
NOTICE_MARKERS: Final[tuple[str, ...]] = (
    "information contained",
    "confidential",
    "unauthorized use",
)

# Spreadsheet serial dates: day 0 = 1899-12-30, 25569 = 1970-01-01
SERIAL_UNIX_EPOCH: Final[int] = 25569
MS_PER_DAY: Final[int] = 86400 * 1000

DATE_LABEL_FORMAT: Final[str] = "%m/%d/%Y"

# Persisted user preference key for the cost rate
RATE_SETTING_KEY: Final[str] = "energyCostRate"
DEFAULT_COST_RATE: Final[float] = 0.0

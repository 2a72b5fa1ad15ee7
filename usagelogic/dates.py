from __future__ import annotations
import logging
import numbers
from datetime import date, datetime, time as _time
from typing import Any, Callable, Optional

import numpy as np
import pandas as pd

from . import canon
from .types import ParsedDate

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def date_label(d: datetime) -> str:
    """Zero-padded MM/DD/YYYY label used to identify a day."""
    return d.strftime(canon.DATE_LABEL_FORMAT)


def midnight(d: datetime | date) -> datetime:
    if isinstance(d, datetime):
        d = d.date()
    return datetime.combine(d, _time(0, 0))


def from_serial(serial: float) -> pd.Timestamp:
    """
    Spreadsheet serial day count -> Timestamp.

    Day 0 is 1899-12-30, so 25569 is 1970-01-01. The result is a calendar
    instant without any timezone shift (44927 -> 2023-01-01 00:00).
    """
    ms = (float(serial) - canon.SERIAL_UNIX_EPOCH) * canon.MS_PER_DAY
    return pd.Timestamp(ms, unit="ms")


def _naive(ts: pd.Timestamp) -> pd.Timestamp:
    # Aware values keep their wall-clock day
    return ts.tz_localize(None) if ts.tz is not None else ts


def _to_timestamp(value: Any) -> Optional[pd.Timestamp]:
    if value is None or isinstance(value, (bool, np.bool_)):
        return None
    try:
        if isinstance(value, (datetime, date, np.datetime64)):
            ts = pd.Timestamp(value)
        elif isinstance(value, (numbers.Number, np.number)):
            if np.isnan(float(value)):  # type: ignore[arg-type]
                return None
            ts = from_serial(float(value))  # type: ignore[arg-type]
        elif isinstance(value, str):
            # Month-first, as the exports are en-US
            ts = pd.to_datetime(value.strip(), errors="coerce")
        else:
            return None
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return _naive(ts)


def normalize_date(value: Any, *, clock: Optional[Clock] = None) -> ParsedDate:
    """
    Normalise a row's date cell to a calendar day.

    Accepts a resolved date, a spreadsheet serial number or free text.
    Anything else (or an invalid date) falls back to the current day with
    ``fallback=True`` and a warning; this substitution is deliberate and
    callers decide what to do with flagged rows.
    """
    ts = _to_timestamp(value)
    if ts is None:
        now = (clock or datetime.now)()
        day = midnight(now)
        logger.warning(
            "Could not parse date %r; using %s instead", value, date_label(day)
        )
        return ParsedDate(date=day, label=date_label(day), fallback=True, raw=value)

    day = midnight(ts.to_pydatetime())
    return ParsedDate(date=day, label=date_label(day), fallback=False, raw=value)

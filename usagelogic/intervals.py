from __future__ import annotations
import logging
import re
from typing import Iterable, Mapping, Any

from . import canon, exceptions, utils

logger = logging.getLogger(__name__)

_LABEL_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*(AM|PM)\s*$")


def is_interval_field(name: Any) -> bool:
    """Interval columns carry a literal 'AM'/'PM' marker in their name."""
    if not isinstance(name, str):
        return False
    return any(m in name for m in canon.MERIDIEM_MARKERS)


def extract_intervals(row: Mapping[str, Any]) -> dict[str, float]:
    """
    Pull the 15-minute interval fields out of a raw row.

    Missing/blank cells read as 0.0. Cells that are not numbers read as 0.0
    and are logged; the row is kept.
    """
    out: dict[str, float] = {}
    for key, value in row.items():
        if not is_interval_field(key):
            continue
        num, ok = utils.coerce_number(value)
        if not ok:
            logger.warning("Unparsable usage %r in interval %r; using 0", value, key)
        out[key] = num
    return out


def parse_label(label: str) -> tuple[int, int]:
    """'H:MM AM|PM' -> (hour 0-23, minute)."""
    m = _LABEL_RE.match(label)
    if m is None:
        raise exceptions.IntervalLabelError(f"Not an interval label: {label!r}")
    hour, minute, period = int(m.group(1)), int(m.group(2)), m.group(3)
    if not (1 <= hour <= 12 and 0 <= minute <= 59):
        raise exceptions.IntervalLabelError(f"Time out of range: {label!r}")
    if period == "PM" and hour != 12:
        hour += 12
    if period == "AM" and hour == 12:
        hour = 0
    return hour, minute


def sort_key(label: str) -> int:
    hour, minute = parse_label(label)
    return hour * 60 + minute


def hour_of(label: str) -> int:
    return parse_label(label)[0]


def hour_label(hour: int) -> str:
    """0 -> '12 AM', 13 -> '1 PM'."""
    h12 = 12 if hour % 12 == 0 else hour % 12
    return f"{h12} {'AM' if hour < 12 else 'PM'}"


def order_labels(labels: Iterable[str]) -> list[str]:
    """
    Order interval labels by time of day.

    Stable: equal keys keep their input order. Labels that don't parse go
    last, in input order.
    """
    keyed: list[tuple[int, str]] = []
    odd: list[str] = []
    for lbl in labels:
        try:
            keyed.append((sort_key(lbl), lbl))
        except exceptions.IntervalLabelError:
            odd.append(lbl)
    if odd:
        logger.warning("Unrecognised interval labels placed last: %s", ", ".join(odd))
    keyed.sort(key=lambda kv: kv[0])
    return [lbl for _, lbl in keyed] + odd

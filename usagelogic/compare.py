from __future__ import annotations
from datetime import datetime
from typing import Optional, Tuple, cast

import numpy as np

from . import stats as stats_mod
from .types import Dataset, Statistics, ComparisonDeltas

# Metrics paired between the two periods
METRICS: tuple[str, ...] = (
    "total_usage",
    "avg_daily_usage",
    "total_cost",
    "avg_daily_cost",
)

Selection = Tuple[Dataset, Optional[str]]


def _start_key(ds: Dataset) -> tuple:
    # Empty datasets have no start and order after any non-empty one.
    # Content breaks the remaining ties so argument order never matters.
    if ds.empty:
        return (1, datetime.max, datetime.max, 0, (), ())
    return (
        0,
        ds.first_date,
        ds.last_date,
        len(ds),
        tuple(r.total for r in ds),
        tuple(ds.date_labels),
    )


def reconcile(a: Dataset, b: Dataset) -> tuple[Dataset, Dataset]:
    """
    Return (earlier, later) so period 1 is always the one that starts first.

    Swaps only when b starts before a. Equal start dates are ordered by end
    date, then length, then daily totals.
    """
    if _start_key(b) < _start_key(a):
        return b, a
    return a, b


def reconcile_selection(a: Selection, b: Selection) -> tuple[Selection, Selection]:
    """reconcile() that carries each dataset's selected date along with it."""
    if _start_key(b[0]) < _start_key(a[0]):
        return b, a
    return a, b


def percent_change(before: float, after: float) -> float:
    """(after - before) / before * 100; before == 0 gives inf or nan."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(after - before) / np.float64(before) * 100.0)


def compare(s1: Statistics, s2: Statistics) -> ComparisonDeltas:
    """
    Deltas of the later period (s2) against the earlier one (s1).

    A zero baseline yields a non-finite percent; callers format it.
    """
    out: dict[str, float] = {}
    for m in METRICS:
        before = float(getattr(s1, m))
        after = float(getattr(s2, m))
        out[f"{m}_diff"] = after - before
        out[f"{m}_percent"] = percent_change(before, after)
    return cast(ComparisonDeltas, out)


def compare_datasets(
    a: Dataset, b: Dataset, rate: float
) -> Optional[tuple[Statistics, Statistics, ComparisonDeltas]]:
    """Reconcile two datasets and compare them at one rate."""
    earlier, later = reconcile(a, b)
    s1 = stats_mod.statistics(earlier, rate)
    s2 = stats_mod.statistics(later, rate)
    if s1 is None or s2 is None:
        return None
    return s1, s2, compare(s1, s2)

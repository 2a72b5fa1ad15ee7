from __future__ import annotations
import numpy as np
import pandas as pd

from . import exceptions, intervals, utils
from .types import Dataset, PatternPoint, AveragePoint, DailyTotal, HourlyAverage


@utils.memoized
def _interval_means(dataset: Dataset) -> pd.Series:
    # Missing cells are already 0, so the denominator is the day count
    frame = dataset.frame()
    if frame.empty:
        return pd.Series(0.0, index=pd.Index(list(dataset.labels)), dtype=float)
    return frame.mean(axis=0)


@utils.memoized
def _hour_buckets(dataset: Dataset) -> pd.Series:
    """Mean usage per hour of day over every (day, interval) observation."""
    frame = dataset.frame()
    sums = np.zeros(24, dtype=float)
    counts = np.zeros(24, dtype=int)
    if len(frame):
        col_sums = frame.sum(axis=0)
        for label in frame.columns:
            try:
                h = intervals.hour_of(label)
            except exceptions.IntervalLabelError:
                continue
            sums[h] += float(col_sums[label])
            counts[h] += len(frame)
    with np.errstate(divide="ignore", invalid="ignore"):
        avg = np.where(counts > 0, sums / np.maximum(counts, 1), 0.0)
    return pd.Series(avg, index=pd.RangeIndex(24, name="hour"))


def daily_pattern(dataset: Dataset, date_label: str) -> list[PatternPoint]:
    """Usage per interval for one day, in time-of-day order."""
    rec = dataset.find(date_label)
    if rec is None:
        return []
    return [
        {"time": label, "usage": float(rec.intervals.get(label, 0.0)), "index": i}
        for i, label in enumerate(dataset.labels)
    ]


def average_pattern(dataset: Dataset) -> list[AveragePoint]:
    """Average day shape: mean of each interval across all days."""
    if dataset.empty:
        return []
    means = _interval_means(dataset)
    return [
        {"time": label, "avg_usage": float(means[label]), "index": i}
        for i, label in enumerate(dataset.labels)
    ]


def daily_totals(dataset: Dataset) -> list[DailyTotal]:
    return [
        {"date": r.date_label, "total": r.total, "min": r.min, "max": r.max}
        for r in dataset
    ]


def hourly_averages(dataset: Dataset) -> list[HourlyAverage]:
    """
    24 hour-of-day buckets ('12 AM'..'11 PM'), four intervals each.

    Each bucket is sum of matched values / number of (day, interval) pairs.
    """
    if dataset.empty:
        return []
    avg = _hour_buckets(dataset)
    return [
        {"hour": intervals.hour_label(h), "avg_usage": float(avg.iloc[h])}
        for h in range(24)
    ]

from __future__ import annotations
from typing import Optional

from . import aggregate, utils
from .types import Dataset, Statistics, StatisticsPayload


def peak_interval(dataset: Dataset) -> tuple[Optional[str], float]:
    """
    Interval with the highest cross-day average.

    Scans in time-of-day order with a strict comparison, so ties resolve to
    the earliest interval.
    """
    points = aggregate.average_pattern(dataset)
    if not points:
        return None, 0.0
    best = points[0]
    for p in points[1:]:
        if p["avg_usage"] > best["avg_usage"]:
            best = p
    return best["time"], best["avg_usage"]


def statistics(dataset: Dataset, rate: float) -> Optional[Statistics]:
    """
    Summary figures for one dataset at a cost rate (currency per kWh).

    Returns None for an empty dataset.
    """
    if dataset.empty:
        return None
    totals = [r.total for r in dataset]
    total_usage = float(sum(totals))
    avg_daily = total_usage / len(totals)
    max_daily = float(max(totals))
    min_daily = float(min(totals))
    peak_time, peak_avg = peak_interval(dataset)
    rate = float(rate)
    return Statistics(
        total_usage=total_usage,
        avg_daily_usage=avg_daily,
        max_daily_usage=max_daily,
        min_daily_usage=min_daily,
        total_cost=total_usage * rate,
        avg_daily_cost=avg_daily * rate,
        max_daily_cost=max_daily * rate,
        min_daily_cost=min_daily * rate,
        peak_time=peak_time,
        peak_avg_usage=peak_avg,
        days_analyzed=len(totals),
        date_range=(dataset.first_label or "", dataset.last_label or ""),
        rate=rate,
    )


def to_payload(stats: Statistics) -> StatisticsPayload:
    """Display strings for the summary cards (two decimals)."""
    return {
        "total_usage": utils.fmt2(stats.total_usage),
        "avg_daily_usage": utils.fmt2(stats.avg_daily_usage),
        "max_daily_usage": utils.fmt2(stats.max_daily_usage),
        "min_daily_usage": utils.fmt2(stats.min_daily_usage),
        "total_cost": utils.fmt2(stats.total_cost),
        "avg_daily_cost": utils.fmt2(stats.avg_daily_cost),
        "max_daily_cost": utils.fmt2(stats.max_daily_cost),
        "min_daily_cost": utils.fmt2(stats.min_daily_cost),
        "peak_time": stats.peak_time,
        "peak_avg_usage": utils.fmt2(stats.peak_avg_usage),
        "days_analyzed": stats.days_analyzed,
        "date_range": f"{stats.date_range[0]} - {stats.date_range[1]}",
    }

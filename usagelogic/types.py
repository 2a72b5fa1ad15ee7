from __future__ import annotations
from typing import TypedDict, Dict, List, Optional, Iterator, Sequence, Tuple, Any
from dataclasses import dataclass
from datetime import datetime

import pandas as pd
from pydantic import BaseModel

from . import intervals, utils


@dataclass(frozen=True)
class ParsedDate:
    """Outcome of date normalisation for a single row.

    ``fallback`` is True when the raw value could not be read as a date and
    the processing time was substituted instead.
    """

    date: datetime  # midnight, naive local
    label: str  # MM/DD/YYYY
    fallback: bool = False
    raw: Any = None


class Record(BaseModel):
    """One calendar day of 15-minute usage.

    Attributes:
        date: Day, normalised to midnight local time
        date_label: MM/DD/YYYY display string, identity key for the day
        min: Row 'Min' value (0 when absent)
        max: Row 'Max' value (0 when absent)
        total: Row 'Total' value; never re-derived from intervals
        intervals: Interval label (e.g. '12:15 AM') -> usage
        date_fallback: True when the date was substituted with 'now'
    """

    date: datetime
    date_label: str
    min: float = 0.0
    max: float = 0.0
    total: float = 0.0
    intervals: Dict[str, float]
    date_fallback: bool = False
    model_config = {"frozen": True}


class Dataset:
    """
    Immutable, date-ordered sequence of Records from one upload.

    Expected:
      - ascending by date, unique date_label
      - every Record carries the interval labels of the first Record
    Derived views are cached on the instance and discarded with it.
    """

    __slots__ = ("_records", "_memo", "__weakref__")

    def __init__(self, records: Sequence[Record] = ()):
        self._records: Tuple[Record, ...] = tuple(records)
        self._memo: dict = {}

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __getitem__(self, i: int) -> Record:
        return self._records[i]

    def __bool__(self) -> bool:
        return bool(self._records)

    def __repr__(self) -> str:
        if not self._records:
            return "Dataset(empty)"
        return f"Dataset({len(self)} days, {self.first_label} - {self.last_label})"

    @property
    def empty(self) -> bool:
        return not self._records

    @property
    def first_date(self) -> Optional[datetime]:
        return self._records[0].date if self._records else None

    @property
    def last_date(self) -> Optional[datetime]:
        return self._records[-1].date if self._records else None

    @property
    def first_label(self) -> Optional[str]:
        return self._records[0].date_label if self._records else None

    @property
    def last_label(self) -> Optional[str]:
        return self._records[-1].date_label if self._records else None

    @property
    def date_labels(self) -> List[str]:
        return [r.date_label for r in self._records]

    @property
    @utils.memoized
    def labels(self) -> Tuple[str, ...]:
        # Ordering is taken once from the first Record and shared by all views
        if not self._records:
            return ()
        return tuple(intervals.order_labels(self._records[0].intervals))

    def find(self, date_label: str) -> Optional[Record]:
        return next((r for r in self._records if r.date_label == date_label), None)

    @utils.memoized
    def frame(self) -> pd.DataFrame:
        """Day x interval usage matrix: index 'date', one column per label."""
        labels = list(self.labels)
        index = pd.Index(self.date_labels, name="date")
        if not labels or not self._records:
            return pd.DataFrame(index=index, columns=labels, dtype=float)
        return pd.DataFrame(
            [[r.intervals.get(lbl, 0.0) for lbl in labels] for r in self._records],
            index=index,
            columns=labels,
            dtype=float,
        )


# Aggregation views
class PatternPoint(TypedDict):
    time: str
    usage: float
    index: int


class AveragePoint(TypedDict):
    time: str
    avg_usage: float
    index: int


class DailyTotal(TypedDict):
    date: str
    total: float
    min: float
    max: float


class HourlyAverage(TypedDict):
    hour: str
    avg_usage: float


@dataclass(frozen=True)
class Statistics:
    total_usage: float
    avg_daily_usage: float
    max_daily_usage: float
    min_daily_usage: float
    total_cost: float
    avg_daily_cost: float
    max_daily_cost: float
    min_daily_cost: float
    peak_time: Optional[str]
    peak_avg_usage: float
    days_analyzed: int
    date_range: Tuple[str, str]
    rate: float


class StatisticsPayload(TypedDict):
    total_usage: str
    avg_daily_usage: str
    max_daily_usage: str
    min_daily_usage: str
    total_cost: str
    avg_daily_cost: str
    max_daily_cost: str
    min_daily_cost: str
    peak_time: Optional[str]
    peak_avg_usage: str
    days_analyzed: int
    date_range: str


class ComparisonDeltas(TypedDict):
    total_usage_diff: float
    total_usage_percent: float
    avg_daily_usage_diff: float
    avg_daily_usage_percent: float
    total_cost_diff: float
    total_cost_percent: float
    avg_daily_cost_diff: float
    avg_daily_cost_percent: float

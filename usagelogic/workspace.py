from __future__ import annotations
import logging
import threading
from dataclasses import dataclass, replace
from typing import IO, Any, Iterable, Literal, Mapping, Optional

from . import compare, exceptions, ingest, stats
from .config import EngineConfig, default_config
from .types import Dataset, Statistics, ComparisonDeltas

logger = logging.getLogger(__name__)

Slot = Literal["primary", "secondary"]
SLOTS: tuple[Slot, ...] = ("primary", "secondary")


@dataclass(frozen=True)
class Period:
    dataset: Dataset
    selected_date: Optional[str]


class Workspace:
    """
    Two upload slots for single-file and side-by-side comparison views.

    Each upload normalises into its own slot and replaces the previous
    Dataset in one swap; a failed decode leaves the slot as it was.
    Comparison only happens once both slots hold data.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or default_config()
        self._lock = threading.Lock()
        self._periods: dict[str, Optional[Period]] = {s: None for s in SLOTS}

    def _check_slot(self, slot: str) -> None:
        exceptions.require(
            slot in SLOTS, f"Unknown slot {slot!r}", exceptions.WorkspaceError
        )

    def _swap(self, slot: str, period: Optional[Period]) -> None:
        with self._lock:
            self._periods[slot] = period

    def get(self, slot: Slot) -> Optional[Period]:
        self._check_slot(slot)
        with self._lock:
            return self._periods[slot]

    def dataset(self, slot: Slot) -> Optional[Dataset]:
        p = self.get(slot)
        return p.dataset if p else None

    def _rate(self) -> float:
        with self._lock:
            return self.config.cost_rate

    def set_rate(self, rate: float) -> None:
        """Replace the cost rate; rejects negative values."""
        with self._lock:
            self.config = replace(self.config, cost_rate=rate)

    def load(self, slot: Slot, rows: Iterable[Mapping[str, Any]]) -> Dataset:
        """Normalise rows into slot; the first day becomes the selected date."""
        self._check_slot(slot)
        ds = ingest.normalize(rows, config=self.config)
        self._swap(slot, Period(ds, ds.first_label))
        logger.info("Loaded %s into %s slot", ds, slot)
        return ds

    def load_file(self, slot: Slot, source: IO[bytes] | str) -> Dataset:
        """Decode a workbook into slot. DecodeError leaves the slot unchanged."""
        self._check_slot(slot)
        ds = ingest.from_excel(source, config=self.config)
        self._swap(slot, Period(ds, ds.first_label))
        logger.info("Loaded %s into %s slot", ds, slot)
        return ds

    def clear(self, slot: Slot) -> None:
        self._check_slot(slot)
        self._swap(slot, None)

    def select_date(self, slot: Slot, date_label: str) -> None:
        p = self.get(slot)
        if p is None or p.dataset.find(date_label) is None:
            raise exceptions.UnknownDateError(
                f"No day {date_label!r} in {slot} slot"
            )
        self._swap(slot, Period(p.dataset, date_label))

    def statistics(self, slot: Slot) -> Optional[Statistics]:
        ds = self.dataset(slot)
        if ds is None:
            return None
        return stats.statistics(ds, self._rate())

    def periods(self) -> Optional[tuple[Period, Period]]:
        """(earlier, later) once both slots are loaded, else None."""
        with self._lock:
            a, b = self._periods["primary"], self._periods["secondary"]
        if a is None or b is None:
            return None
        (ds1, sel1), (ds2, sel2) = compare.reconcile_selection(
            (a.dataset, a.selected_date), (b.dataset, b.selected_date)
        )
        return Period(ds1, sel1), Period(ds2, sel2)

    def comparison(self) -> Optional[ComparisonDeltas]:
        periods = self.periods()
        if periods is None:
            return None
        rate = self._rate()
        s1 = stats.statistics(periods[0].dataset, rate)
        s2 = stats.statistics(periods[1].dataset, rate)
        if s1 is None or s2 is None:
            return None
        return compare.compare(s1, s2)

from __future__ import annotations
import logging
from typing import IO, Any, Iterable, Mapping, Optional

import pandas as pd

from . import dates, exceptions, filters, intervals, utils
from .config import EngineConfig, default_config
from .types import Dataset, Record

logger = logging.getLogger(__name__)


def _number_field(row: Mapping[str, Any], field: str) -> float:
    value = row.get(field)
    num, ok = utils.coerce_number(value)
    if not ok:
        logger.warning("Unparsable %s value %r; using 0", field, value)
    return num


def to_record(
    row: Mapping[str, Any],
    *,
    config: Optional[EngineConfig] = None,
    clock: Optional[dates.Clock] = None,
) -> Record:
    """Normalise one data row (already past the row filter) to a Record."""
    cfg = config or default_config()
    parsed = dates.normalize_date(row.get(cfg.date_field), clock=clock)
    return Record(
        date=parsed.date,
        date_label=parsed.label,
        min=_number_field(row, cfg.min_field),
        max=_number_field(row, cfg.max_field),
        total=_number_field(row, cfg.total_field),
        intervals=intervals.extract_intervals(row),
        date_fallback=parsed.fallback,
    )


def _dedupe_days(records: list[Record]) -> list[Record]:
    """
    One Record per day, keeping the last row for that day.

    A row with a real date always wins over one whose date was substituted;
    keep-last applies among rows of the same kind. Expects date order in,
    returns date order out.
    """
    # Fallback rows first so keep="last" lands on a real-dated row if any
    ranked = sorted(records, key=lambda r: not r.date_fallback)
    dup = pd.Index([r.date_label for r in ranked]).duplicated(keep="last")
    if dup.any():
        logger.warning(
            "Dropped %d duplicate day rows: %s",
            int(dup.sum()),
            ", ".join(sorted({r.date_label for r, d in zip(ranked, dup) if d})),
        )
    kept = [r for r, d in zip(ranked, dup) if not d]
    kept.sort(key=lambda r: r.date)
    return kept


def _conform_labels(records: list[Record]) -> list[Record]:
    """Give every Record the first Record's interval labels (missing -> 0)."""
    if not records:
        return records
    labels = list(records[0].intervals)
    keyset = set(labels)
    out = [records[0]]
    changed = 0
    for rec in records[1:]:
        if set(rec.intervals) != keyset:
            changed += 1
            rec = rec.model_copy(
                update={"intervals": {k: rec.intervals.get(k, 0.0) for k in labels}}
            )
        out.append(rec)
    if changed:
        logger.debug("Aligned interval labels on %d days to the first day", changed)
    return out


def normalize(
    rows: Iterable[Mapping[str, Any]],
    *,
    config: Optional[EngineConfig] = None,
    clock: Optional[dates.Clock] = None,
) -> Dataset:
    """
    Turn decoded spreadsheet rows into a Dataset.

      - drops non-data rows (blank dates, legal notices)
      - one Record per row, dates normalised, intervals extracted
      - sorted ascending by date (stable), one Record per day
      - interval labels aligned to the earliest day

    Record.total is taken as given; it is not checked against the
    interval values.
    """
    cfg = config or default_config()
    kept = filters.filter_rows(
        rows, date_field=cfg.date_field, markers=cfg.notice_markers
    )
    records = [to_record(row, config=cfg, clock=clock) for row in kept]
    records.sort(key=lambda r: r.date)
    records = _conform_labels(_dedupe_days(records))
    return Dataset(records)


def from_dataframe(
    df: pd.DataFrame,
    *,
    config: Optional[EngineConfig] = None,
    clock: Optional[dates.Clock] = None,
) -> Dataset:
    """Normalise a decoded sheet held as a DataFrame (one row per day)."""
    return normalize(df.to_dict(orient="records"), config=config, clock=clock)


def from_excel(
    source: IO[bytes] | str,
    *,
    sheet_name: int | str = 0,
    config: Optional[EngineConfig] = None,
    clock: Optional[dates.Clock] = None,
) -> Dataset:
    """
    Read the first sheet of an .xlsx/.xls export and normalise it.

    Any failure to decode the workbook raises DecodeError.
    """
    try:
        raw = pd.read_excel(source, sheet_name=sheet_name)
    except Exception as e:
        # engine/IO errors from the decoder vary by backend
        raise exceptions.DecodeError(f"Could not read workbook: {e}") from e
    return from_dataframe(raw, config=config, clock=clock)

from __future__ import annotations
import logging
from typing import Any, Iterable, Iterator, Mapping, Optional

from . import canon, utils

logger = logging.getLogger(__name__)


def is_notice_text(value: str, markers: Iterable[str] = canon.NOTICE_MARKERS) -> bool:
    lower = value.lower()
    return any(m in lower for m in markers)


def is_data_row(
    row: Mapping[str, Any],
    *,
    date_field: str = canon.DATE_FIELD,
    markers: Iterable[str] = canon.NOTICE_MARKERS,
) -> bool:
    """
    Keep/discard decision for one raw row.

    Discards rows whose date cell is absent or falsy, and rows whose date
    cell is text containing a legal-notice marker. Nothing else is checked.
    """
    value = row.get(date_field)
    if utils.is_missing(value) or not value:
        return False
    if isinstance(value, str) and is_notice_text(value, markers):
        return False
    return True


def filter_rows(
    rows: Iterable[Mapping[str, Any]],
    *,
    date_field: str = canon.DATE_FIELD,
    markers: Optional[Iterable[str]] = None,
) -> Iterator[Mapping[str, Any]]:
    markers = tuple(markers) if markers is not None else canon.NOTICE_MARKERS
    dropped = 0
    for row in rows:
        if is_data_row(row, date_field=date_field, markers=markers):
            yield row
        else:
            dropped += 1
    if dropped:
        logger.debug("Discarded %d non-data rows", dropped)

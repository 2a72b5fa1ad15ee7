import logging

from . import (
    canon,
    exceptions,
    utils,
    intervals,
    types,
    dates,
    config,
    filters,
    ingest,
    aggregate,
    stats,
    compare,
    workspace,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "canon",
    "exceptions",
    "utils",
    "intervals",
    "types",
    "dates",
    "config",
    "filters",
    "ingest",
    "aggregate",
    "stats",
    "compare",
    "workspace",
]

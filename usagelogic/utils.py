# usagelogic/utils.py
from __future__ import annotations
import functools
import numbers
from typing import Any, Callable, TypeVar

import numpy as np
import pandas as pd

F = TypeVar("F", bound=Callable[..., Any])


def memoized(fn: F) -> F:
    """
    Cache fn(dataset, *args) on the dataset itself.

    Datasets are never mutated, so the cache is valid for the lifetime of the
    instance and is dropped together with it when a new upload replaces it.
    """

    @functools.wraps(fn)
    def wrapper(dataset, *args):
        key = (fn.__qualname__, *args)
        cache = dataset._memo
        if key not in cache:
            cache[key] = fn(dataset, *args)
        return cache[key]

    return wrapper  # type: ignore[return-value]


def is_missing(value: Any) -> bool:
    """None, NaN, NaT or pd.NA."""
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # list-likes: never a single missing cell
        return False


def coerce_number(value: Any) -> tuple[float, bool]:
    """
    Read a spreadsheet cell as a float.

    Returns (number, ok). Missing and falsy cells read as 0.0 and are ok;
    anything that cannot be read as a number reads as 0.0 with ok=False.
    """
    if is_missing(value):
        return 0.0, True
    if isinstance(value, (numbers.Number, np.number)):
        return float(value), True  # type: ignore[arg-type]
    if isinstance(value, str):
        s = value.strip().replace(",", "")
        if not s:
            return 0.0, True
        try:
            out = float(s)
        except ValueError:
            return 0.0, False
        return (0.0 if np.isnan(out) else out), True
    return 0.0, False


def fmt2(x: float) -> str:
    return f"{x:.2f}"

from datetime import datetime

import pytest

from usagelogic import intervals


def _labels():
    out = []
    for h in range(24):
        for m in (0, 15, 30, 45):
            out.append(f"{intervals.hour_label(h).split()[0]}:{m:02d} {'AM' if h < 12 else 'PM'}")
    return out


@pytest.fixture
def all_labels():
    """The 96 interval column names in time-of-day order."""
    return _labels()


@pytest.fixture
def make_row(all_labels):
    """Build a raw export row; interval values default to 0.25 kWh."""

    def _make(date, total=24.0, value=0.25, **extra):
        row = {"Date": date, "Min": 0.1, "Max": 0.5, "Total": total}
        row.update({lbl: value for lbl in all_labels})
        row.update(extra)
        return row

    return _make


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2025, 5, 6, 13, 45)


@pytest.fixture
def week_rows(make_row):
    # Deliberately out of order, with a footer notice row
    rows = [make_row(f"2024-01-0{d}", total=float(d)) for d in (3, 1, 2, 5, 4, 7, 6)]
    rows.append({"Date": "The information contained herein is confidential."})
    rows.append({"Date": None})
    return rows

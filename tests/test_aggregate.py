"""Derived views: day pattern, average pattern, daily totals, hourly buckets."""

import pytest

from usagelogic import aggregate, ingest


def _hour_valued_row(date, all_labels, scale=1.0):
    # every interval carries its hour of day (times scale)
    row = {"Date": date, "Total": 1.0}
    for i, lbl in enumerate(all_labels):
        row[lbl] = (i // 4) * scale
    return row


def test_daily_totals_length_and_order(week_rows):
    ds = ingest.normalize(week_rows)
    out = aggregate.daily_totals(ds)
    assert len(out) == len(ds)
    assert [d["date"] for d in out] == ds.date_labels
    assert [d["total"] for d in out] == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0]
    assert out[0]["min"] == 0.1 and out[0]["max"] == 0.5


def test_daily_pattern_follows_ordering():
    rows = [{"Date": "2024-01-01", "1:00 AM": 3.0, "12:00 AM": 1.0, "12:15 AM": 2.0}]
    ds = ingest.normalize(rows)
    out = aggregate.daily_pattern(ds, "01/01/2024")
    assert out == [
        {"time": "12:00 AM", "usage": 1.0, "index": 0},
        {"time": "12:15 AM", "usage": 2.0, "index": 1},
        {"time": "1:00 AM", "usage": 3.0, "index": 2},
    ]


def test_daily_pattern_unknown_day_is_empty(week_rows):
    ds = ingest.normalize(week_rows)
    assert aggregate.daily_pattern(ds, "12/25/1999") == []


def test_average_pattern_single_day_round_trip(make_row, all_labels):
    row = make_row("2024-01-01")
    for i, lbl in enumerate(all_labels):
        row[lbl] = i * 0.01
    ds = ingest.normalize([row])
    avg = {p["time"]: p["avg_usage"] for p in aggregate.average_pattern(ds)}
    assert avg == ds[0].intervals


def test_average_pattern_counts_missing_as_zero():
    rows = [
        {"Date": "2024-01-01", "12:00 AM": 4.0, "12:15 AM": 2.0},
        {"Date": "2024-01-02", "12:15 AM": 4.0},
    ]
    ds = ingest.normalize(rows)
    out = aggregate.average_pattern(ds)
    assert [p["avg_usage"] for p in out] == [2.0, 3.0]
    assert [p["index"] for p in out] == [0, 1]


def test_hourly_averages(all_labels):
    rows = [
        _hour_valued_row("2024-01-01", all_labels, scale=1.0),
        _hour_valued_row("2024-01-02", all_labels, scale=3.0),
    ]
    ds = ingest.normalize(rows)
    out = aggregate.hourly_averages(ds)
    assert len(out) == 24
    assert out[0]["hour"] == "12 AM"
    assert out[12]["hour"] == "12 PM"
    assert out[23]["hour"] == "11 PM"
    # mean over 2 days x 4 intervals of h and 3h
    for h, bucket in enumerate(out):
        assert bucket["avg_usage"] == pytest.approx(2.0 * h)


def test_hourly_averages_partial_hours():
    rows = [{"Date": "2024-01-01", "1:00 PM": 2.0, "1:15 PM": 4.0}]
    ds = ingest.normalize(rows)
    out = aggregate.hourly_averages(ds)
    assert out[13]["avg_usage"] == pytest.approx(3.0)
    assert out[0]["avg_usage"] == 0.0


def test_empty_dataset_views_are_empty():
    ds = ingest.normalize([])
    assert aggregate.daily_totals(ds) == []
    assert aggregate.average_pattern(ds) == []
    assert aggregate.hourly_averages(ds) == []
    assert aggregate.daily_pattern(ds, "01/01/2024") == []


def test_views_are_cached_per_dataset(week_rows):
    ds = ingest.normalize(week_rows)
    assert ds.frame() is ds.frame()
    first = aggregate.average_pattern(ds)
    first[0]["avg_usage"] = -1.0  # caller-side mutation must not leak
    assert aggregate.average_pattern(ds)[0]["avg_usage"] == 0.25

    other = ingest.normalize(week_rows)
    assert other.frame() is not ds.frame()


def test_hourly_averages_skip_out_of_range_labels():
    rows = [{"Date": "2024-01-01", "12:00 AM": 1.0, "13:00 PM": 2.0, "12:75 AM": 5.0}]
    ds = ingest.normalize(rows)
    out = aggregate.hourly_averages(ds)
    assert len(out) == 24
    assert out[0]["avg_usage"] == pytest.approx(1.0)
    assert sum(b["avg_usage"] for b in out[1:]) == 0.0
    # still part of the average pattern, ordered after real times
    assert [p["time"] for p in aggregate.average_pattern(ds)] == ["12:00 AM", "13:00 PM", "12:75 AM"]

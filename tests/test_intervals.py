"""Interval extraction and time-of-day ordering."""

import random

import numpy as np
import pytest

from usagelogic import exceptions, intervals


def test_extract_selects_meridiem_columns_only():
    row = {
        "Date": "2024-01-01",
        "Total": 3.0,
        "12:00 AM": 0.5,
        "1:15 PM": "0.75",
        "Meter am": 9,  # lowercase marker is not an interval
        "11:45 PM": None,
    }
    out = intervals.extract_intervals(row)
    assert out == {"12:00 AM": 0.5, "1:15 PM": 0.75, "11:45 PM": 0.0}


def test_extract_defaults_blank_and_garbage_to_zero(caplog):
    row = {"12:00 AM": "", "12:15 AM": np.nan, "12:30 AM": "n/a", "12:45 AM": 0}
    out = intervals.extract_intervals(row)
    assert out == {"12:00 AM": 0.0, "12:15 AM": 0.0, "12:30 AM": 0.0, "12:45 AM": 0.0}
    assert "12:30 AM" in caplog.text


@pytest.mark.parametrize(
    "label,expected",
    [
        ("12:00 AM", (0, 0)),
        ("12:45 AM", (0, 45)),
        ("1:00 AM", (1, 0)),
        ("11:30 AM", (11, 30)),
        ("12:00 PM", (12, 0)),
        ("1:15 PM", (13, 15)),
        ("11:45 PM", (23, 45)),
    ],
)
def test_parse_label_12_to_24_hour(label, expected):
    assert intervals.parse_label(label) == expected


def test_parse_label_rejects_garbage():
    with pytest.raises(exceptions.IntervalLabelError):
        intervals.parse_label("noon")


def test_ordering_chain():
    labels = ["11:45 PM", "12:00 PM", "1:00 AM", "12:15 AM", "12:00 AM"]
    assert intervals.order_labels(labels) == [
        "12:00 AM",
        "12:15 AM",
        "1:00 AM",
        "12:00 PM",
        "11:45 PM",
    ]


def test_ordering_is_stable_and_repeatable(all_labels):
    shuffled = list(all_labels)
    random.Random(7).shuffle(shuffled)
    once = intervals.order_labels(shuffled)
    assert once == all_labels
    assert intervals.order_labels(once) == once
    assert intervals.order_labels(shuffled) == once


def test_unparseable_labels_sort_last():
    out = intervals.order_labels(["1:00 PM", "PM total", "12:00 AM"])
    assert out == ["12:00 AM", "1:00 PM", "PM total"]


def test_hour_labels():
    assert intervals.hour_label(0) == "12 AM"
    assert intervals.hour_label(11) == "11 AM"
    assert intervals.hour_label(12) == "12 PM"
    assert intervals.hour_label(23) == "11 PM"


@pytest.mark.parametrize("label", ["13:00 PM", "12:75 AM", "0:15 AM", "99:00 PM"])
def test_parse_label_rejects_out_of_range_times(label):
    with pytest.raises(exceptions.IntervalLabelError):
        intervals.parse_label(label)


def test_out_of_range_labels_sort_last():
    out = intervals.order_labels(["13:00 PM", "1:00 AM", "12:75 AM", "12:00 AM"])
    assert out == ["12:00 AM", "1:00 AM", "13:00 PM", "12:75 AM"]

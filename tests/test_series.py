"""
Tests for the time series data model: validation, period stepping per timeframe, alignment and truncation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import date, datetime

import numpy as np
import pytest

from datasources.exceptions import InvalidTimeframe
from engine.enums import Timeframe
from engine.series import SeriesPoint, TimeSeries, advance_period, align, coerce_period


def test_from_rows_accepts_strings_and_dates():
    s = TimeSeries.from_rows("python", "daily", [("2024-01-01", 3), (date(2024, 1, 2), 5)])
    assert s.timeframe is Timeframe.daily
    assert s.periods == [datetime(2024, 1, 1), datetime(2024, 1, 2)]
    assert s.counts == [3, 5]
    assert s.values().dtype == np.float64


def test_rejects_unordered_or_duplicate_periods():
    with pytest.raises(ValueError):
        TimeSeries.from_rows("t", "daily", [("2024-01-02", 1), ("2024-01-01", 1)])
    with pytest.raises(ValueError):
        TimeSeries.from_rows("t", "daily", [("2024-01-01", 1), ("2024-01-01", 2)])


def test_rejects_negative_counts():
    with pytest.raises(ValueError):
        TimeSeries(term="t", timeframe=Timeframe.daily, points=(SeriesPoint(datetime(2024, 1, 1), -1),))


def test_unknown_timeframe():
    with pytest.raises(InvalidTimeframe):
        TimeSeries.from_rows("t", "yearly", [])


def test_empty_series():
    s = TimeSeries(term="t", timeframe=Timeframe.weekly)
    assert len(s) == 0
    assert s.last_period is None
    assert s.future_periods(3) == []


def test_advance_period_by_timeframe():
    start = datetime(2024, 1, 31, 10)
    assert advance_period(start, Timeframe.hourly, 3) == datetime(2024, 1, 31, 13)
    assert advance_period(start, Timeframe.daily, 1) == datetime(2024, 2, 1, 10)
    assert advance_period(start, Timeframe.weekly, 2) == datetime(2024, 2, 14, 10)
    # month ends clamp to the shorter month
    assert advance_period(start, Timeframe.monthly, 1) == datetime(2024, 2, 29, 10)
    assert advance_period(start, Timeframe.monthly, 13) == datetime(2025, 2, 28, 10)


def test_future_periods(make_series):
    s = make_series([1, 2, 3], timeframe="monthly", start=datetime(2024, 10, 1))
    assert s.future_periods(3) == [datetime(2025, 1, 1), datetime(2025, 2, 1), datetime(2025, 3, 1)]


def test_format_period():
    hourly = TimeSeries(term="t", timeframe=Timeframe.hourly)
    daily = TimeSeries(term="t", timeframe=Timeframe.daily)
    moment = datetime(2024, 5, 6, 7)
    assert hourly.format_period(moment) == "2024-05-06 07:00:00"
    assert daily.format_period(moment) == "2024-05-06"


def test_tail_keeps_most_recent(make_series):
    s = make_series([1, 2, 3, 4, 5])
    assert s.tail(2).counts == [4, 5]
    assert s.tail(10) is s
    assert len(s.tail(0)) == 0


def test_align_on_shared_periods(make_series):
    a = make_series([1, 2, 3, 4], term="a")
    b = make_series([10, 20, 30], term="b", start=datetime(2024, 1, 2))
    periods, (va, vb) = align([a, b])
    assert periods == [datetime(2024, 1, 2), datetime(2024, 1, 3), datetime(2024, 1, 4)]
    assert va.tolist() == [2.0, 3.0, 4.0]
    assert vb.tolist() == [10.0, 20.0, 30.0]


def test_coerce_period_rejects_numbers():
    with pytest.raises(TypeError):
        coerce_period(12345)

"""
Tests for descriptive statistics, moving averages and outlier detection.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math

import numpy as np
import pytest

from config import settings
from engine.enums import ErrorKind, TrendDirection, TrendStrength
from engine.result import NOT_ENOUGH_DATA, Failure
from engine.statistics import describe, moving_average, rolling_mean_std


def test_moving_average_window_one_is_identity():
    values = [3, 1, 4, 1, 5, 9, 2, 6]
    assert moving_average(values, 1) == [float(v) for v in values]


def test_moving_average_leading_slots_undefined():
    assert moving_average([1, 2, 3, 4], 2) == [None, 1.5, 2.5, 3.5]
    assert moving_average([1, 2], 3) == [None, None]


def test_moving_average_rejects_bad_window():
    with pytest.raises(ValueError):
        moving_average([1, 2, 3], 0)


def test_rolling_mean_std_population():
    means, stds = rolling_mean_std([2, 4, 4, 4, 5, 5, 7, 9], 8)
    assert np.isnan(means[:7]).all()
    assert means[7] == pytest.approx(5.0)
    assert stds[7] == pytest.approx(2.0)


def test_empty_series_fails(make_series):
    result = describe(make_series([]))
    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.insufficient_data
    assert result.reason == NOT_ENOUGH_DATA


def test_single_point_has_no_trend(make_series):
    stats = describe(make_series([5]))
    assert stats.basic.count == 1
    assert stats.basic.mean == 5
    assert stats.basic.median == 5
    assert stats.basic.min == stats.basic.max == 5
    assert stats.trend is None
    assert stats.growth_rate is None
    assert stats.outliers == []


def test_linear_series(make_series):
    stats = describe(make_series([1, 2, 3, 4, 5]))
    assert stats.basic.mean == pytest.approx(3.0)
    assert stats.basic.median == pytest.approx(3.0)
    assert stats.basic.variance == pytest.approx(2.0)
    assert stats.basic.std_dev == pytest.approx(math.sqrt(2.0))
    assert stats.basic.range == 4
    assert stats.trend.slope == pytest.approx(1.0)
    assert stats.trend.intercept == pytest.approx(1.0)
    assert stats.trend.direction is TrendDirection.upward
    assert stats.trend.strength is TrendStrength.strong
    assert stats.growth_rate == pytest.approx(400.0)


def test_even_length_median(make_series):
    assert describe(make_series([1, 2, 3, 10])).basic.median == pytest.approx(2.5)


def test_trend_strength_bands(make_series):
    falling = describe(make_series([100 - 0.05 * i * 20 for i in range(5)]))
    assert falling.trend.direction is TrendDirection.downward
    assert falling.trend.strength is TrendStrength.strong

    flat = describe(make_series([7] * 10))
    assert flat.trend.direction is TrendDirection.stable
    assert flat.trend.strength is TrendStrength.weak


def test_growth_rate_absent_when_first_is_zero(make_series):
    assert describe(make_series([0, 5, 10])).growth_rate is None


def test_outliers(make_series):
    values = [10] * 19 + [100]
    stats = describe(make_series(values))
    assert [o.index for o in stats.outliers] == [19]
    assert stats.outliers[0].value == 100
    assert stats.outliers[0].z_score > 3


def test_no_outliers_on_constant_series(make_series):
    assert describe(make_series([4] * 12)).outliers == []


def test_moving_average_windows(make_series, monkeypatch):
    stats = describe(make_series(range(1, 11)))
    assert set(stats.moving_averages) == {7, 30}
    ma7 = stats.moving_averages[7]
    assert ma7[:6] == [None] * 6
    assert ma7[6] == pytest.approx(4.0)
    assert stats.moving_averages[30] == [None] * 10

    monkeypatch.setattr(settings, "stats_ma_windows", (3,))
    assert set(describe(make_series(range(5))).moving_averages) == {3}

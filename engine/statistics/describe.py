"""
Descriptive statistics for a term's count series: central tendency and spread, a least-squares linear trend over index positions, growth rate, moving averages and z-score outliers.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import numpy as np
from scipy.stats import linregress

from config import settings
from engine.enums import TrendDirection, TrendStrength
from engine.result import Result, insufficient_data
from engine.series import TimeSeries
from engine.statistics.moving import moving_average


@dataclass(frozen=True)
class BasicStats:
    count: int
    mean: float
    median: float
    variance: float
    std_dev: float
    min: float
    max: float
    range: float


@dataclass(frozen=True)
class LinearTrend:
    slope: float
    intercept: float
    direction: TrendDirection
    strength: TrendStrength


@dataclass(frozen=True)
class Outlier:
    index: int
    period: datetime
    value: float
    z_score: float


@dataclass(frozen=True)
class SeriesStatistics:
    series: TimeSeries
    basic: BasicStats
    # None when fewer than two points make the slope undefined
    trend: Optional[LinearTrend]
    growth_rate: Optional[float]
    moving_averages: Dict[int, List[Optional[float]]] = field(default_factory=dict)
    outliers: List[Outlier] = field(default_factory=list)


def _direction(slope: float) -> TrendDirection:
    if slope > 0:
        return TrendDirection.upward
    if slope < 0:
        return TrendDirection.downward
    return TrendDirection.stable


def _strength(slope: float) -> TrendStrength:
    magnitude = abs(slope)
    if magnitude > settings.stats_trend_strong:
        return TrendStrength.strong
    if magnitude > settings.stats_trend_moderate:
        return TrendStrength.moderate
    return TrendStrength.weak


def _linear_trend(arr: np.ndarray) -> Optional[LinearTrend]:
    if len(arr) < 2:
        return None
    fit = linregress(np.arange(len(arr), dtype=float), arr)
    slope, intercept = float(fit.slope), float(fit.intercept)
    return LinearTrend(
        slope=slope,
        intercept=intercept,
        direction=_direction(slope),
        strength=_strength(slope),
    )


def _growth_rate(arr: np.ndarray) -> Optional[float]:
    if len(arr) < 2 or arr[0] == 0:
        return None
    return float((arr[-1] / arr[0] - 1.0) * 100.0)


def _outliers(series: TimeSeries, arr: np.ndarray, mean: float, std: float, z_limit: float) -> List[Outlier]:
    if std == 0:
        return []
    z = np.abs(arr - mean) / std
    return [
        Outlier(index=int(i), period=series.points[i].period, value=float(arr[i]), z_score=float(z[i]))
        for i in np.flatnonzero(z > z_limit)
    ]


def describe(
    series: TimeSeries,
    ma_windows: Sequence[int] | None = None,
    outlier_z: float | None = None,
) -> Result[SeriesStatistics]:
    if ma_windows is None:
        ma_windows = settings.stats_ma_windows
    if outlier_z is None:
        outlier_z = settings.stats_outlier_z
    if len(series) == 0:
        return insufficient_data(term=series.term)

    arr = series.values()
    mean = float(arr.mean())
    variance = float(np.mean((arr - mean) ** 2))
    std = float(np.sqrt(variance))
    lo, hi = float(arr.min()), float(arr.max())

    basic = BasicStats(
        count=len(arr),
        mean=mean,
        median=float(np.median(arr)),
        variance=variance,
        std_dev=std,
        min=lo,
        max=hi,
        range=hi - lo,
    )

    return SeriesStatistics(
        series=series,
        basic=basic,
        trend=_linear_trend(arr),
        growth_rate=_growth_rate(arr),
        moving_averages={w: moving_average(arr, w) for w in ma_windows},
        outliers=_outliers(series, arr, mean, std, outlier_z),
    )

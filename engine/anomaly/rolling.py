"""
Rolling-window spike and drop detection for term count series, judging each observation against the mean and standard deviation of the window that precedes it.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from config import settings
from engine.enums import AnomalyType
from engine.result import Result, insufficient_data
from engine.series import TimeSeries
from engine.statistics.moving import rolling_mean_std


@dataclass(frozen=True)
class AnomalyRecord:
    period: datetime
    value: float
    expected: float
    z_score: float
    type: AnomalyType


@dataclass(frozen=True)
class AnomalyReport:
    series: TimeSeries
    window_size: int
    anomalies: List[AnomalyRecord] = field(default_factory=list)
    # audit series, aligned with periods, starting at index window_size - 1
    moving_average: List[float] = field(default_factory=list)
    moving_std_dev: List[float] = field(default_factory=list)
    periods: List[datetime] = field(default_factory=list)


def window_size(length: int) -> int:
    raw = int(round(length / settings.anomaly_window_divisor))
    return max(settings.anomaly_window_min, min(settings.anomaly_window_max, raw))


def _deviation(value: float, mean: float, std: float) -> float:
    if std > 0:
        return float((value - mean) / std)
    if value == mean:
        return 0.0
    return math.copysign(math.inf, value - mean)


def detect(series: TimeSeries, window: int | None = None, sigma: float | None = None) -> Result[AnomalyReport]:
    if sigma is None:
        sigma = settings.anomaly_sigma
    n = len(series)
    if window is None:
        window = window_size(n)
    if n == 0 or n < window:
        return insufficient_data(term=series.term, window_size=window, points=n)

    arr = series.values()
    means, stds = rolling_mean_std(arr, window)

    anomalies: List[AnomalyRecord] = []
    for i in range(window, n):
        mu, sd = means[i - 1], stds[i - 1]
        upper = mu + sigma * sd
        lower = mu - sigma * sd
        value = float(arr[i])
        if value > upper:
            kind = AnomalyType.spike
        elif value < lower:
            kind = AnomalyType.drop
        else:
            continue
        anomalies.append(AnomalyRecord(
            period=series.points[i].period,
            value=value,
            expected=float(mu),
            z_score=_deviation(value, float(mu), float(sd)),
            type=kind,
        ))

    first = window - 1
    return AnomalyReport(
        series=series,
        window_size=window,
        anomalies=anomalies,
        moving_average=[float(v) for v in means[first:]],
        moving_std_dev=[float(v) for v in stds[first:]],
        periods=series.periods[first:],
    )

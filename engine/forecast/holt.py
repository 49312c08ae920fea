"""
Holt double exponential smoothing: level and trend are updated with fixed smoothing constants over the history and extrapolated linearly over the horizon.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import numpy as np

from config import settings
from engine.enums import ModelType
from engine.forecast.models import ForecastResult, ModelSpec, check_horizon, forecast_points
from engine.result import Result, insufficient_data
from engine.series import TimeSeries


def forecast(
    series: TimeSeries,
    horizon: int | None = None,
    alpha: float | None = None,
    beta: float | None = None,
) -> Result[ForecastResult]:
    if horizon is None:
        horizon = settings.forecast_default_horizon
    if alpha is None:
        alpha = settings.smoothing_alpha
    if beta is None:
        beta = settings.smoothing_beta
    check_horizon(horizon)

    data = series.values()
    n = len(data)
    if n < 2:
        return insufficient_data(term=series.term, model=ModelType.double_exponential_smoothing.value)

    level = data[0]
    trend = data[1] - data[0]
    smoothed = np.empty(n)
    smoothed[0] = level
    for i in range(1, n):
        prev_level = level
        level = alpha * data[i] + (1 - alpha) * (level + trend)
        trend = beta * (level - prev_level) + (1 - beta) * trend
        smoothed[i] = level

    steps = np.arange(1, horizon + 1, dtype=float)
    return ForecastResult(
        series=series,
        model=ModelSpec(
            type=ModelType.double_exponential_smoothing,
            parameters={"alpha": alpha, "beta": beta},
        ),
        fitted=[float(v) for v in smoothed],
        forecast=forecast_points(series, level + steps * trend),
        fitted_label="smoothed",
    )

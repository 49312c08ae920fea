"""
Holt-Winters triple exponential smoothing with multiplicative seasonality, seeded from per-phase seasonal averages and extrapolated with the seasonal index of each future phase.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import numpy as np

from config import settings
from engine.enums import ErrorKind, ModelType
from engine.forecast.models import ForecastResult, ModelSpec, check_horizon, forecast_points
from engine.result import NOT_ENOUGH_SEASONAL_DATA, Failure, Result, insufficient_data
from engine.series import TimeSeries


def initial_seasonal_indices(data: np.ndarray, season_length: int) -> np.ndarray:
    seasonal = np.array([data[p::season_length].mean() for p in range(season_length)], dtype=float)
    total = seasonal.sum()
    if total > 0:
        seasonal *= season_length / total
    return seasonal


def forecast(
    series: TimeSeries,
    horizon: int | None = None,
    season_length: int | None = None,
    alpha: float | None = None,
    beta: float | None = None,
    gamma: float | None = None,
) -> Result[ForecastResult]:
    if horizon is None:
        horizon = settings.forecast_default_horizon
    if season_length is None:
        season_length = settings.season_length
    if alpha is None:
        alpha = settings.smoothing_alpha
    if beta is None:
        beta = settings.smoothing_beta
    if gamma is None:
        gamma = settings.smoothing_gamma
    check_horizon(horizon)
    if season_length < 1:
        raise ValueError(f"season_length must be >= 1, got {season_length}")

    data = series.values()
    n = len(data)
    if n == 0:
        return insufficient_data(term=series.term, model=ModelType.holt_winters.value)
    if n < 2 * season_length:
        return Failure(
            kind=ErrorKind.insufficient_seasonal_data,
            reason=NOT_ENOUGH_SEASONAL_DATA,
            details={"term": series.term, "points": n, "required": 2 * season_length},
        )

    seasonal = initial_seasonal_indices(data, season_length)
    level = data[0]
    trend = (data[season_length] - data[0]) / season_length

    smoothed = np.empty(n)
    smoothed[0] = level * seasonal[0]
    for i in range(1, n):
        s = i % season_length
        prev_level = level
        if seasonal[s] == 0:
            # a phase that never sees counts carries no level information
            level = prev_level + trend
            smoothed[i] = 0.0
            continue
        level = alpha * (data[i] / seasonal[s]) + (1 - alpha) * (prev_level + trend)
        trend = beta * (level - prev_level) + (1 - beta) * trend
        # a zero level leaves the seasonal index as it was
        if level != 0:
            seasonal[s] = gamma * (data[i] / level) + (1 - gamma) * seasonal[s]
        smoothed[i] = level * seasonal[s]

    values = [
        (level + step * trend) * seasonal[(n + step - 1) % season_length]
        for step in range(1, horizon + 1)
    ]
    return ForecastResult(
        series=series,
        model=ModelSpec(
            type=ModelType.holt_winters,
            parameters={
                "alpha": alpha,
                "beta": beta,
                "gamma": gamma,
                "season_length": season_length,
            },
        ),
        fitted=[float(v) for v in smoothed],
        forecast=forecast_points(series, values),
        fitted_label="smoothed",
    )

"""
Linear regression forecast: ordinary least squares of counts against index position, with R-squared as a goodness-of-fit indicator and the fitted line extended over the horizon.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from config import settings
from engine.enums import ModelType
from engine.forecast.models import ForecastResult, ModelSpec, check_horizon, forecast_points
from engine.result import Result, insufficient_data
from engine.series import TimeSeries


def _linear_fit(vals: np.ndarray) -> tuple[float, float]:
    n = len(vals)
    x = np.arange(n, dtype=float)
    sum_x, sum_y = x.sum(), vals.sum()
    sum_xy, sum_xx = (x * vals).sum(), (x * x).sum()
    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return float(slope), float(intercept)


def _r_squared(vals: np.ndarray, fitted: np.ndarray) -> Optional[float]:
    ss_tot = float(np.sum((vals - vals.mean()) ** 2))
    if ss_tot == 0:
        return None
    ss_res = float(np.sum((vals - fitted) ** 2))
    return 1.0 - ss_res / ss_tot


def forecast(series: TimeSeries, horizon: int | None = None) -> Result[ForecastResult]:
    if horizon is None:
        horizon = settings.forecast_default_horizon
    check_horizon(horizon)

    vals = series.values()
    n = len(vals)
    if n < 2:
        return insufficient_data(term=series.term, model=ModelType.linear_regression.value)

    slope, intercept = _linear_fit(vals)
    fitted = intercept + slope * np.arange(n, dtype=float)
    future = intercept + slope * (n - 1 + np.arange(1, horizon + 1, dtype=float))

    return ForecastResult(
        series=series,
        model=ModelSpec(
            type=ModelType.linear_regression,
            parameters={
                "slope": slope,
                "intercept": intercept,
                "r_squared": _r_squared(vals, fitted),
            },
        ),
        fitted=[float(v) for v in fitted],
        forecast=forecast_points(series, future),
        fitted_label="fitted",
    )

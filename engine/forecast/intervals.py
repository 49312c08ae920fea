"""
Prediction intervals around any forecast, sized from the in-sample residual spread of the model (or a moving-average proxy when the model has no fitted history) and widened linearly with the forecast step.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

import numpy as np
from scipy.stats import norm

from config import CONFIDENCE_Z_SCORES, settings
from engine.forecast.ensemble import EnsembleResult
from engine.forecast.models import ForecastPoint, ForecastResult, ModelSpec
from engine.result import Result, insufficient_data
from engine.series import TimeSeries
from engine.statistics.moving import moving_average


@dataclass(frozen=True)
class IntervalForecast:
    series: TimeSeries
    forecast: List[ForecastPoint]
    mae: float
    std_dev_error: float
    confidence_level: float
    z: float
    model: ModelSpec

    def half_widths(self) -> List[float]:
        return [p.upper_bound - p.value for p in self.forecast]


def z_score(confidence: float) -> float:
    if confidence in CONFIDENCE_Z_SCORES:
        return CONFIDENCE_Z_SCORES[confidence]
    if not 0 < confidence < 1:
        raise ValueError(f"confidence must be in (0, 1), got {confidence!r}")
    return float(norm.ppf((1 + confidence) / 2))


def proxy_fitted(values: np.ndarray, window: int | None = None) -> np.ndarray:
    """Moving average stand-in for models without fitted values.

    The leading window-1 slots take the first defined average.
    """
    if window is None:
        window = settings.interval_proxy_window
    window = min(window, len(values))
    averaged = moving_average(values, window)
    first = averaged[window - 1]
    return np.array([first if v is None else v for v in averaged], dtype=float)


def build(
    result: Union[ForecastResult, EnsembleResult],
    confidence: float | None = None,
    growth: float | None = None,
) -> Result[IntervalForecast]:
    if confidence is None:
        confidence = settings.interval_default_confidence
    if growth is None:
        growth = settings.interval_horizon_growth
    z = z_score(confidence)

    if isinstance(result, EnsembleResult):
        result = result.as_forecast()

    actual = result.series.values()
    if len(actual) == 0:
        return insufficient_data(term=result.series.term)

    if result.fitted is not None:
        fitted = np.asarray(result.fitted, dtype=float)
    else:
        fitted = proxy_fitted(actual)

    errors = np.abs(actual - fitted)
    mae = float(errors.mean())
    std_err = float(errors.std())

    points = []
    for k, point in enumerate(result.forecast):
        width = std_err * z * (1 + k * growth)
        points.append(
            ForecastPoint(
                period=point.period,
                value=point.value,
                lower_bound=max(0.0, point.value - width),
                upper_bound=point.value + width,
            )
        )

    return IntervalForecast(
        series=result.series,
        forecast=points,
        mae=mae,
        std_dev_error=std_err,
        confidence_level=confidence,
        z=z,
        model=result.model,
    )

"""
Shared result types for the forecasting models: forecast points, model metadata and the fitted-history-plus-forecast result every model produces.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from engine.enums import ModelType
from engine.series import TimeSeries


@dataclass(frozen=True)
class ForecastPoint:
    period: datetime
    value: float
    lower_bound: Optional[float] = None
    upper_bound: Optional[float] = None


@dataclass(frozen=True)
class ModelSpec:
    type: ModelType
    parameters: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, **self.parameters}


@dataclass(frozen=True)
class ForecastResult:
    series: TimeSeries
    model: ModelSpec
    fitted: Optional[List[float]]
    forecast: List[ForecastPoint]
    # payload key for the fitted history: "smoothed" or "fitted"
    fitted_label: str = "fitted"

    @property
    def horizon(self) -> int:
        return len(self.forecast)

    @property
    def values(self) -> List[float]:
        return [p.value for p in self.forecast]


def forecast_points(series: TimeSeries, values: Sequence[float]) -> List[ForecastPoint]:
    periods = series.future_periods(len(values))
    return [ForecastPoint(period=p, value=max(0.0, float(v))) for p, v in zip(periods, values)]


def check_horizon(horizon: int) -> None:
    if int(horizon) != horizon or horizon < 1:
        raise ValueError(f"horizon must be a positive integer, got {horizon!r}")

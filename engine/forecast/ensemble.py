"""
Ensemble forecasting that blends the Holt, linear regression and (when enough seasonal history exists) Holt-Winters forecasts into a single per-step mean.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

import numpy as np

from engine.enums import ErrorKind, ModelType
from engine.forecast import holt, holt_winters, linear
from engine.forecast.models import ForecastPoint, ForecastResult, ModelSpec
from engine.result import ENSEMBLE_FAILED, Failure, Result
from engine.series import TimeSeries

MEMBER_EXPONENTIAL = "exponential_smoothing"
MEMBER_LINEAR = "linear_regression"
MEMBER_HOLT_WINTERS = "holt_winters"


@dataclass(frozen=True)
class EnsemblePoint:
    period: datetime
    value: float
    exp_value: float
    lin_value: float
    hw_value: Optional[float] = None


@dataclass(frozen=True)
class EnsembleResult:
    series: TimeSeries
    points: List[EnsemblePoint]
    models_used: Dict[str, bool]
    # effective weight of each member in the per-step mean
    model_weights: Dict[str, float] = field(default_factory=dict)

    @property
    def model(self) -> ModelSpec:
        return ModelSpec(
            type=ModelType.ensemble,
            parameters={"models_used": dict(self.models_used), "model_weights": dict(self.model_weights)},
        )

    def as_forecast(self) -> ForecastResult:
        return ForecastResult(
            series=self.series,
            model=self.model,
            fitted=None,
            forecast=[ForecastPoint(period=p.period, value=p.value) for p in self.points],
            fitted_label="fitted",
        )


def blend(
    series: TimeSeries,
    exponential: Result[ForecastResult],
    linear_result: Result[ForecastResult],
    seasonal: Result[ForecastResult],
) -> Result[EnsembleResult]:
    # failure details use the short model names callers pass to forecast()
    mandatory = {"exponential": exponential, "linear": linear_result}
    if any(isinstance(r, Failure) for r in mandatory.values()):
        return Failure(
            kind=ErrorKind.insufficient_data,
            reason=ENSEMBLE_FAILED,
            details={name: (r.reason if isinstance(r, Failure) else None) for name, r in mandatory.items()},
        )

    members: List[ForecastResult] = [exponential, linear_result]
    use_seasonal = not isinstance(seasonal, Failure)
    if use_seasonal:
        members.append(seasonal)

    horizon = min(m.horizon for m in members)
    stacked = np.array([m.values[:horizon] for m in members], dtype=float)
    combined = stacked.mean(axis=0)

    points = [
        EnsemblePoint(
            period=exponential.forecast[i].period,
            value=float(combined[i]),
            exp_value=float(stacked[0, i]),
            lin_value=float(stacked[1, i]),
            hw_value=float(stacked[2, i]) if use_seasonal else None,
        )
        for i in range(horizon)
    ]
    weight = 1.0 / len(members)
    return EnsembleResult(
        series=series,
        points=points,
        models_used={
            MEMBER_EXPONENTIAL: True,
            MEMBER_LINEAR: True,
            MEMBER_HOLT_WINTERS: use_seasonal,
        },
        model_weights={
            MEMBER_EXPONENTIAL: weight,
            MEMBER_LINEAR: weight,
            MEMBER_HOLT_WINTERS: weight if use_seasonal else 0.0,
        },
    )


def forecast(
    series: TimeSeries,
    horizon: int | None = None,
    season_length: int | None = None,
) -> Result[EnsembleResult]:
    return blend(
        series,
        holt.forecast(series, horizon),
        linear.forecast(series, horizon),
        holt_winters.forecast(series, horizon, season_length=season_length),
    )

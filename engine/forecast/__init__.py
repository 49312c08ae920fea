"""
Forecasting models for term count series: Holt double exponential smoothing, Holt-Winters multiplicative seasonality, linear regression, their ensemble and prediction intervals around any of them.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from engine.forecast.models import ForecastPoint, ForecastResult, ModelSpec
from engine.forecast import holt, holt_winters, linear
from engine.forecast.ensemble import EnsemblePoint, EnsembleResult
from engine.forecast.intervals import IntervalForecast, z_score
from engine.forecast import ensemble, intervals

__all__ = [
    "ForecastPoint",
    "ForecastResult",
    "ModelSpec",
    "EnsemblePoint",
    "EnsembleResult",
    "IntervalForecast",
    "z_score",
    "holt",
    "holt_winters",
    "linear",
    "ensemble",
    "intervals",
]

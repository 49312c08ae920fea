"""
Enumerations for Timeframes, Forecast Models, Anomaly Types and Failure Kinds

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum


class Timeframe(str, Enum):
    hourly = "hourly"
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"

    @classmethod
    def parse(cls, value: str | Timeframe) -> Timeframe:
        if isinstance(value, Timeframe):
            return value
        from datasources.exceptions import InvalidTimeframe

        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise InvalidTimeframe(f"Unsupported timeframe: {value!r}") from exc

    @property
    def period_format(self) -> str:
        if self is Timeframe.hourly:
            return "%Y-%m-%d %H:%M:%S"
        return "%Y-%m-%d"


class ForecastModel(str, Enum):
    exponential = "exponential"
    linear = "linear"
    holtwinters = "holtwinters"
    ensemble = "ensemble"


class ModelType(str, Enum):
    double_exponential_smoothing = "double_exponential_smoothing"
    holt_winters = "holt_winters"
    linear_regression = "linear_regression"
    ensemble = "ensemble"


class AnomalyType(str, Enum):
    spike = "spike"
    drop = "drop"


class TrendDirection(str, Enum):
    upward = "upward"
    downward = "downward"
    stable = "stable"


class TrendStrength(str, Enum):
    strong = "strong"
    moderate = "moderate"
    weak = "weak"


class LeadLagStatus(str, Enum):
    concurrent = "concurrent"
    lagged = "lagged"


class ErrorKind(str, Enum):
    insufficient_data = "insufficient_data"
    insufficient_seasonal_data = "insufficient_seasonal_data"
    insufficient_overlap = "insufficient_overlap"
    degenerate_input = "degenerate_input"
    upstream_unavailable = "upstream_unavailable"

"""
Response payloads for forecasts, statistics, anomaly reports and similarity results, using the JSON field names existing consumers read.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union
from datetime import datetime
import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_serializer
from engine.enums import AnomalyType, LeadLagStatus
from engine.forecast.ensemble import EnsembleResult
from engine.forecast.intervals import IntervalForecast
from engine.forecast.models import ForecastResult
from engine.result import Failure
from engine.series import TimeSeries


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


def _period(series: TimeSeries, period: datetime) -> str:
    return series.format_period(period)


class HistoricalPoint(NpModel):

    period: str
    count: int


def _historical(series: TimeSeries) -> List[HistoricalPoint]:
    return [HistoricalPoint(period=_period(series, p.period), count=p.count) for p in series.points]


class ForecastPointPayload(NpModel):

    period: str
    value: float
    lower_bound: Optional[float] = None
    upper_bound: Optional[float] = None
    exp_value: Optional[float] = None
    lin_value: Optional[float] = None
    hw_value: Optional[float] = None


class ErrorMetrics(NpModel):

    mae: float
    std_dev_error: float


class ForecastPayload(NpModel):

    model_config = ConfigDict(protected_namespaces=())

    term: str
    timeframe: str
    historical: List[HistoricalPoint]
    smoothed: Optional[List[float]] = None
    fitted: Optional[List[float]] = None
    forecast: List[ForecastPointPayload]
    model: Dict[str, Any]
    models_used: Optional[Dict[str, bool]] = None
    model_weights: Optional[Dict[str, float]] = None
    error_metrics: Optional[ErrorMetrics] = None
    confidence_level: Optional[float] = None

    @classmethod
    def from_result(cls, result: Union[ForecastResult, EnsembleResult, IntervalForecast]) -> ForecastPayload:
        series = result.series
        base = {
            "term": series.term,
            "timeframe": series.timeframe.value,
            "historical": _historical(series),
            "model": result.model.as_dict(),
        }
        if isinstance(result, EnsembleResult):
            return cls(
                **base,
                forecast=[
                    ForecastPointPayload(
                        period=_period(series, p.period),
                        value=p.value,
                        exp_value=p.exp_value,
                        lin_value=p.lin_value,
                        hw_value=p.hw_value,
                    )
                    for p in result.points
                ],
                models_used=dict(result.models_used),
                model_weights=dict(result.model_weights),
            )

        points = [
            ForecastPointPayload(
                period=_period(series, p.period),
                value=p.value,
                lower_bound=p.lower_bound,
                upper_bound=p.upper_bound,
            )
            for p in result.forecast
        ]
        if isinstance(result, IntervalForecast):
            return cls(
                **base,
                forecast=points,
                error_metrics=ErrorMetrics(mae=result.mae, std_dev_error=result.std_dev_error),
                confidence_level=result.confidence_level,
            )
        return cls(**base, forecast=points, **{result.fitted_label: result.fitted})


class BasicStatsPayload(NpModel):

    count: int
    mean: float
    median: float
    variance: float
    std_dev: float
    min: float
    max: float
    range: float


class LinearTrendPayload(NpModel):

    slope: float
    intercept: float
    trend_direction: str
    strength: str


class TrendAnalysis(NpModel):

    linear_regression: Optional[LinearTrendPayload] = None
    growth_rate: Optional[float] = None


class OutlierPayload(NpModel):

    index: int
    period: str
    value: float
    z_score: float


class StatisticsPayload(NpModel):

    term: str
    basic_stats: BasicStatsPayload
    trend_analysis: TrendAnalysis
    moving_averages: Dict[str, List[Optional[float]]]
    outliers: List[OutlierPayload] = Field(default_factory=list)

    @classmethod
    def from_result(cls, stats) -> StatisticsPayload:
        series = stats.series
        trend = None
        if stats.trend is not None:
            trend = LinearTrendPayload(
                slope=stats.trend.slope,
                intercept=stats.trend.intercept,
                trend_direction=stats.trend.direction.value,
                strength=stats.trend.strength.value,
            )
        return cls(
            term=series.term,
            basic_stats=BasicStatsPayload(**vars(stats.basic)),
            trend_analysis=TrendAnalysis(linear_regression=trend, growth_rate=stats.growth_rate),
            moving_averages={f"ma{w}": values for w, values in stats.moving_averages.items()},
            outliers=[
                OutlierPayload(index=o.index, period=_period(series, o.period), value=o.value, z_score=o.z_score)
                for o in stats.outliers
            ],
        )


class AnomalyPayload(NpModel):

    period: str
    value: float
    expected: float
    deviation: float
    type: AnomalyType


class AnomalyAnalysis(NpModel):

    window_size: int
    moving_average: List[float]
    moving_std_dev: List[float]
    periods: List[str]


class AnomalyReportPayload(NpModel):

    term: str
    anomalies: List[AnomalyPayload]
    analysis: AnomalyAnalysis

    @classmethod
    def from_result(cls, report) -> AnomalyReportPayload:
        series = report.series
        return cls(
            term=series.term,
            anomalies=[
                AnomalyPayload(
                    period=_period(series, a.period),
                    value=a.value,
                    expected=a.expected,
                    deviation=a.z_score,
                    type=a.type,
                )
                for a in report.anomalies
            ],
            analysis=AnomalyAnalysis(
                window_size=report.window_size,
                moving_average=report.moving_average,
                moving_std_dev=report.moving_std_dev,
                periods=[_period(series, p) for p in report.periods],
            ),
        )


class CommonDateRange(NpModel):

    start: str
    end: str
    data_points: int


class SimilarityMetrics(NpModel):

    correlation: float
    correlation_strength: str
    euclidean_distance: float
    dtw_distance: float
    cosine_similarity: float


class LeadLagPayload(NpModel):

    status: LeadLagStatus
    leader: Optional[str] = None
    follower: Optional[str] = None
    lag_periods: int = 0


class CrossCorrelation(NpModel):

    lag: int
    value: float


class TermSummaryPayload(NpModel):

    average: float
    max: float
    variance: float


class ComparisonPayload(NpModel):

    common_date_range: CommonDateRange
    similarity_metrics: SimilarityMetrics
    lead_lag_relationship: LeadLagPayload
    max_cross_correlation: CrossCorrelation
    comparative_stats: Dict[str, TermSummaryPayload]

    @classmethod
    def from_result(cls, report) -> ComparisonPayload:
        fmt = report.timeframe.period_format
        return cls(
            common_date_range=CommonDateRange(
                start=report.start.strftime(fmt),
                end=report.end.strftime(fmt),
                data_points=report.data_points,
            ),
            similarity_metrics=SimilarityMetrics(
                correlation=report.correlation,
                correlation_strength=report.correlation_strength,
                euclidean_distance=report.euclidean_distance,
                dtw_distance=report.dtw_distance,
                cosine_similarity=report.cosine_similarity,
            ),
            lead_lag_relationship=LeadLagPayload(**vars(report.lead_lag)),
            max_cross_correlation=CrossCorrelation(**vars(report.max_cross_correlation)),
            comparative_stats={term: TermSummaryPayload(**vars(s)) for term, s in report.comparative_stats.items()},
        )


class CorrelationsPayload(NpModel):

    correlations: Dict[str, Dict[str, float]]
    data_points: int
    missing_terms: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, matrix) -> CorrelationsPayload:
        return cls(correlations=matrix.values, data_points=matrix.data_points, missing_terms=matrix.missing)


class FailurePayload(NpModel):

    error: str
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_failure(cls, failure: Failure) -> FailurePayload:
        return cls(error=failure.reason, details=dict(failure.details))

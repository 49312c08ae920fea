"""
Trend predictor orchestrating series reads through the per-instance cache and the statistics, anomaly, forecasting and similarity engines.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence, Union

from config import settings
from datasources.base import SeriesStore
from engine import anomaly, statistics
from engine.cache import SeriesCache
from engine.enums import ForecastModel, Timeframe
from engine.forecast import ensemble, holt, holt_winters, intervals, linear
from engine.forecast.ensemble import EnsembleResult
from engine.forecast.intervals import IntervalForecast
from engine.forecast.models import ForecastResult, check_horizon
from engine.result import Failure, Result
from engine.series import TimeSeries
from engine.similarity import CorrelationMatrix, SimilarityReport, compare, correlation_matrix

log = logging.getLogger(__name__)

AnyForecast = Union[ForecastResult, EnsembleResult]


def _horizon(horizon: Optional[int]) -> int:
    if horizon is None:
        horizon = settings.forecast_default_horizon
    check_horizon(horizon)
    if horizon > settings.forecast_max_horizon:
        raise ValueError(f"horizon {horizon} exceeds the maximum of {settings.forecast_max_horizon}")
    return int(horizon)


class TrendPredictor:
    """Per-request facade over a series store.

    Each instance owns its cache, so reads made by one call (for example the
    three ensemble members) are shared without leaking into other requests.
    """

    def __init__(self, store: SeriesStore, cache: Optional[SeriesCache] = None) -> None:
        self.store = store
        self.cache = cache if cache is not None else SeriesCache()

    async def get_series(
        self,
        term: str,
        timeframe: Timeframe | str = Timeframe.daily,
        limit: Optional[int] = None,
    ) -> TimeSeries:
        tf = Timeframe.parse(timeframe)
        if limit is None:
            limit = settings.history_limit
        cached = self.cache.get(term, tf, min_limit=limit)
        if cached is not None:
            return cached.tail(limit)
        log.debug("series cache miss term=%s timeframe=%s limit=%d", term, tf.value, limit)
        series = await self.store.get_series(term, tf, limit)
        self.cache.put(series, limit)
        return series

    def _seasonal_limit(self, season_length: Optional[int]) -> int:
        if season_length is None:
            season_length = settings.season_length
        return max(settings.history_limit, settings.seasonal_history_seasons * season_length)

    async def analyze_statistics(
        self, term: str, timeframe: Timeframe | str = Timeframe.daily
    ) -> Result[statistics.SeriesStatistics]:
        return statistics.describe(await self.get_series(term, timeframe))

    async def detect_anomalies(
        self, term: str, timeframe: Timeframe | str = Timeframe.daily
    ) -> Result[anomaly.AnomalyReport]:
        return anomaly.detect(await self.get_series(term, timeframe))

    async def forecast(
        self,
        term: str,
        model: ForecastModel | str = ForecastModel.ensemble,
        horizon: Optional[int] = None,
        timeframe: Timeframe | str = Timeframe.daily,
        season_length: Optional[int] = None,
    ) -> Result[AnyForecast]:
        model = ForecastModel(model)
        if model is ForecastModel.ensemble:
            return await self.ensemble_forecast(term, horizon, timeframe, season_length)

        steps = _horizon(horizon)
        if model is ForecastModel.holtwinters:
            series = await self.get_series(term, timeframe, self._seasonal_limit(season_length))
            return holt_winters.forecast(series, steps, season_length=season_length)

        series = await self.get_series(term, timeframe)
        if model is ForecastModel.exponential:
            return holt.forecast(series, steps)
        return linear.forecast(series, steps)

    async def ensemble_forecast(
        self,
        term: str,
        horizon: Optional[int] = None,
        timeframe: Timeframe | str = Timeframe.daily,
        season_length: Optional[int] = None,
    ) -> Result[EnsembleResult]:
        steps = _horizon(horizon)
        seasonal_series = await self.get_series(term, timeframe, self._seasonal_limit(season_length))
        series = seasonal_series.tail(settings.history_limit)

        exp_result, lin_result, hw_result = await asyncio.gather(
            asyncio.to_thread(holt.forecast, series, steps),
            asyncio.to_thread(linear.forecast, series, steps),
            asyncio.to_thread(holt_winters.forecast, seasonal_series, steps, season_length),
        )
        if isinstance(hw_result, Failure):
            log.debug("ensemble %s: holt-winters skipped (%s)", term, hw_result.reason)
        result = ensemble.blend(series, exp_result, lin_result, hw_result)
        if isinstance(result, Failure):
            log.info("ensemble forecast failed for %s: %s", term, result.details)
        return result

    def prediction_intervals(
        self, result: AnyForecast, confidence: Optional[float] = None
    ) -> Result[IntervalForecast]:
        return intervals.build(result, confidence)

    async def forecast_with_intervals(
        self,
        term: str,
        model: ForecastModel | str = ForecastModel.ensemble,
        horizon: Optional[int] = None,
        timeframe: Timeframe | str = Timeframe.daily,
        confidence: Optional[float] = None,
    ) -> Result[IntervalForecast]:
        result = await self.forecast(term, model, horizon, timeframe)
        if isinstance(result, Failure):
            return result
        return self.prediction_intervals(result, confidence)

    async def compare_trends(
        self, first: str, second: str, timeframe: Timeframe | str = Timeframe.daily
    ) -> Result[SimilarityReport]:
        a, b = await asyncio.gather(
            self.get_series(first, timeframe),
            self.get_series(second, timeframe),
        )
        return compare(a, b)

    async def find_correlations(
        self, terms: Sequence[str], timeframe: Timeframe | str = Timeframe.daily
    ) -> Result[CorrelationMatrix]:
        series: List[TimeSeries] = list(
            await asyncio.gather(*(self.get_series(term, timeframe) for term in dict.fromkeys(terms)))
        )
        return correlation_matrix(series)

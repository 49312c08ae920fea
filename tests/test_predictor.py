"""
Tests for the trend predictor: cached series reads, model dispatch, intervals and similarity over an in-memory store.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import datetime, timedelta

import pytest

from config import settings
from datasources.exceptions import StoreUnavailable
from datasources.memory import InMemorySeriesStore
from engine.enums import ErrorKind, ModelType, Timeframe
from engine.forecast import ensemble
from engine.forecast.ensemble import EnsembleResult
from engine.forecast.intervals import IntervalForecast
from engine.forecast.models import ForecastResult
from engine.predictor import TrendPredictor
from engine.result import Failure
from engine.similarity import CorrelationMatrix, SimilarityReport

START = datetime(2024, 1, 1)
WAVE = [10, 14, 18, 25, 17, 12, 9]


def _daily(n, fn):
    return [(START + timedelta(days=i), fn(i)) for i in range(n)]


@pytest.fixture
def store():
    s = InMemorySeriesStore()
    s.add("python", "daily", _daily(100, lambda i: WAVE[i % 7] + i // 30))
    s.add("python", "weekly", _daily(20, lambda i: 100 + i))
    s.add("rust", "daily", _daily(100, lambda i: 2 * WAVE[i % 7] + 1))
    s.add("tiny", "daily", _daily(1, lambda i: 3))
    return s


@pytest.mark.asyncio
async def test_get_series_reads_once_per_timeframe(store):
    predictor = TrendPredictor(store)
    first = await predictor.get_series("python")
    assert len(first) == settings.history_limit
    assert first.last_period == START + timedelta(days=99)
    again = await predictor.get_series("python", "daily")
    assert again is first
    assert store.reads == 1

    await predictor.get_series("python", Timeframe.weekly)
    assert store.reads == 2
    await predictor.get_series("python")
    assert store.reads == 3


@pytest.mark.asyncio
async def test_get_series_longer_request_rereads(store):
    predictor = TrendPredictor(store)
    short = await predictor.get_series("python", limit=10)
    assert len(short) == 10
    longer = await predictor.get_series("python", limit=50)
    assert len(longer) == 50
    assert store.reads == 2
    shorter = await predictor.get_series("python", limit=5)
    assert shorter.counts == longer.counts[-5:]
    assert store.reads == 2


@pytest.mark.asyncio
async def test_unknown_term_is_empty(store):
    predictor = TrendPredictor(store)
    assert len(await predictor.get_series("nope")) == 0
    stats = await predictor.analyze_statistics("nope")
    assert isinstance(stats, Failure)
    assert stats.kind is ErrorKind.insufficient_data


@pytest.mark.asyncio
async def test_statistics_and_anomalies(store):
    predictor = TrendPredictor(store)
    stats = await predictor.analyze_statistics("python")
    assert stats.basic.count == 90
    report = await predictor.detect_anomalies("python")
    assert report.window_size == 30
    assert store.reads == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "model,expected",
    [
        ("exponential", ModelType.double_exponential_smoothing),
        ("linear", ModelType.linear_regression),
        ("holtwinters", ModelType.holt_winters),
    ],
)
async def test_forecast_dispatch(store, model, expected):
    result = await TrendPredictor(store).forecast("python", model=model, horizon=5)
    assert isinstance(result, ForecastResult)
    assert result.model.type is expected
    assert result.horizon == 5


@pytest.mark.asyncio
async def test_ensemble_matches_direct_computation(store):
    predictor = TrendPredictor(store)
    result = await predictor.forecast("python", horizon=14)
    assert isinstance(result, EnsembleResult)
    assert result.models_used["holt_winters"] is True
    direct = ensemble.forecast(await predictor.get_series("python"), horizon=14)
    assert [p.value for p in result.points] == pytest.approx([p.value for p in direct.points])
    assert store.reads == 1


@pytest.mark.asyncio
async def test_ensemble_failure_is_returned(store):
    result = await TrendPredictor(store).ensemble_forecast("tiny", horizon=3)
    assert isinstance(result, Failure)
    assert set(result.details) == {"exponential", "linear"}


@pytest.mark.asyncio
async def test_bad_model_or_horizon(store):
    predictor = TrendPredictor(store)
    with pytest.raises(ValueError):
        await predictor.forecast("python", model="arima")
    with pytest.raises(ValueError):
        await predictor.forecast("python", model="linear", horizon=0)
    with pytest.raises(ValueError):
        await predictor.forecast("python", model="linear", horizon=settings.forecast_max_horizon + 1)


@pytest.mark.asyncio
async def test_forecast_with_intervals(store):
    predictor = TrendPredictor(store)
    result = await predictor.forecast_with_intervals("python", "linear", horizon=7, confidence=0.99)
    assert isinstance(result, IntervalForecast)
    assert result.confidence_level == 0.99
    assert len(result.forecast) == 7
    assert all(p.lower_bound is not None and p.upper_bound is not None for p in result.forecast)

    failed = await predictor.forecast_with_intervals("tiny", horizon=3)
    assert isinstance(failed, Failure)


@pytest.mark.asyncio
async def test_compare_and_correlations(store):
    predictor = TrendPredictor(store)
    report = await predictor.compare_trends("python", "rust")
    assert isinstance(report, SimilarityReport)
    assert report.data_points == 90
    assert report.correlation > 0.9

    matrix = await predictor.find_correlations(["python", "rust", "ghost", "python"])
    assert isinstance(matrix, CorrelationMatrix)
    assert matrix.terms == ["python", "rust"]
    assert matrix.missing == ["ghost"]


@pytest.mark.asyncio
async def test_store_errors_propagate():
    class BrokenStore(InMemorySeriesStore):
        async def get_series(self, term, timeframe, limit):
            raise StoreUnavailable("down")

    with pytest.raises(StoreUnavailable):
        await TrendPredictor(BrokenStore()).analyze_statistics("python")


@pytest.mark.asyncio
async def test_top_terms(store):
    assert await store.top_terms(2) == ["rust", "python"]
    assert await store.top_terms(10) == ["rust", "python", "tiny"]

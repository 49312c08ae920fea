"""
Batch forecast job that computes ensemble forecasts with prediction intervals for the most active terms and publishes them to the key-value store.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from api.responses import ForecastPayload
from config import settings
from datasources.base import SeriesStore
from datasources.exceptions import StoreUnavailable
from engine.enums import ForecastModel, Timeframe
from engine.predictor import TrendPredictor
from engine.result import is_failure
from store import forecasts
from store.client import is_using_fallback

log = logging.getLogger(__name__)


@dataclass
class BatchOutcome:
    term: str
    timeframe: Timeframe
    key: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchSummary:
    terms: List[str] = field(default_factory=list)
    outcomes: List[BatchOutcome] = field(default_factory=list)
    duration_ms: int = 0

    @property
    def published(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)


async def _forecast_term(
    predictor: TrendPredictor,
    term: str,
    timeframe: Timeframe,
    horizon: int,
) -> BatchOutcome:
    try:
        result = await predictor.forecast_with_intervals(term, ForecastModel.ensemble, horizon, timeframe)
    except StoreUnavailable as exc:
        log.warning("  %s %s: store unavailable: %s", term, timeframe.value, exc)
        return BatchOutcome(term=term, timeframe=timeframe, error=str(exc))

    if is_failure(result):
        log.info("  %s %s: %s", term, timeframe.value, result.reason)
        return BatchOutcome(term=term, timeframe=timeframe, error=result.reason)

    payload = ForecastPayload.from_result(result).model_dump(mode="json", exclude_none=True)
    key = await forecasts.save(term, timeframe.value, ForecastModel.ensemble.value, payload)
    log.info("  %s %s: published %d steps", term, timeframe.value, len(result.forecast))
    return BatchOutcome(term=term, timeframe=timeframe, key=key)


async def run_batch(
    store: SeriesStore,
    top_terms: int | None = None,
    horizon: int | None = None,
    timeframes: Sequence[Timeframe | str] | None = None,
) -> BatchSummary:
    if top_terms is None:
        top_terms = settings.batch_top_terms
    if horizon is None:
        horizon = settings.batch_horizon
    if timeframes is None:
        timeframes = settings.batch_timeframes
    frames = [Timeframe.parse(tf) for tf in timeframes]

    started = time.monotonic()
    summary = BatchSummary(terms=await store.top_terms(top_terms))
    log.info("Batch forecast: %d terms x %d timeframes", len(summary.terms), len(frames))

    for index, term in enumerate(summary.terms, start=1):
        log.info("Processing term %d/%d: %s", index, len(summary.terms), term)
        predictor = TrendPredictor(store)
        for timeframe in frames:
            summary.outcomes.append(await _forecast_term(predictor, term, timeframe, horizon))

    summary.duration_ms = int((time.monotonic() - started) * 1000)
    log.info(
        "Batch forecast finished in %dms: %d published, %d failed",
        summary.duration_ms, summary.published, summary.failed,
    )
    if is_using_fallback() and summary.published:
        log.warning("Redis unavailable: %d forecasts are held in process memory only", summary.published)
    return summary

"""
Pairwise trend comparison: aligns two term series on their shared periods and reports correlation, shape distances, cross-correlation lead/lag and per-term summary statistics.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

import numpy as np

from config import CORRELATION_STRENGTH_BANDS, settings
from engine.enums import ErrorKind, Timeframe
from engine.result import INSUFFICIENT_OVERLAP, INSUFFICIENT_TERM_DATA, Failure, Result, insufficient_data
from engine.series import TimeSeries, align
from engine.similarity.distance import cosine, dtw, euclidean, normalize
from engine.similarity.lag import LagCorrelation, LeadLag, cross_correlation, lead_lag
from engine.similarity.pearson import pearson

log = logging.getLogger(__name__)

NEGLIGIBLE = "negligible or no correlation"


@dataclass(frozen=True)
class TermSummary:
    average: float
    max: float
    variance: float


@dataclass(frozen=True)
class SimilarityReport:
    first: str
    second: str
    timeframe: Timeframe
    start: datetime
    end: datetime
    data_points: int
    correlation: float
    correlation_strength: str
    euclidean_distance: float
    dtw_distance: float
    cosine_similarity: float
    lead_lag: LeadLag
    max_cross_correlation: LagCorrelation
    cross_correlation: List[LagCorrelation] = field(default_factory=list)
    comparative_stats: Dict[str, TermSummary] = field(default_factory=dict)


def interpret_correlation(value: float) -> str:
    magnitude = abs(value)
    for threshold, label in CORRELATION_STRENGTH_BANDS:
        if magnitude > threshold:
            return f"{label} {'positive' if value > 0 else 'negative'}"
    return NEGLIGIBLE


def _summary(values: np.ndarray) -> TermSummary:
    return TermSummary(
        average=float(values.mean()),
        max=float(values.max()),
        variance=float(values.var()),
    )


def overlap_failure(points: int, required: int) -> Failure:
    return Failure(
        kind=ErrorKind.insufficient_overlap,
        reason=INSUFFICIENT_OVERLAP,
        details={"data_points": points, "required": required},
    )


def compare(
    first: TimeSeries,
    second: TimeSeries,
    min_overlap: int | None = None,
) -> Result[SimilarityReport]:
    if min_overlap is None:
        min_overlap = settings.similarity_min_overlap
    if len(first) == 0 or len(second) == 0:
        return insufficient_data(
            INSUFFICIENT_TERM_DATA,
            terms=[s.term for s in (first, second) if len(s) == 0],
        )

    periods, (a, b) = align([first, second])
    if len(periods) < min_overlap:
        log.debug("compare %s/%s: %d shared periods", first.term, second.term, len(periods))
        return overlap_failure(len(periods), min_overlap)

    correlation = pearson(a, b)
    norm_a, norm_b = normalize(a), normalize(b)
    sweep, best = cross_correlation(a, b)

    return SimilarityReport(
        first=first.term,
        second=second.term,
        timeframe=first.timeframe,
        start=periods[0],
        end=periods[-1],
        data_points=len(periods),
        correlation=correlation,
        correlation_strength=interpret_correlation(correlation),
        euclidean_distance=euclidean(norm_a, norm_b),
        dtw_distance=dtw(norm_a, norm_b),
        cosine_similarity=cosine(a, b),
        lead_lag=lead_lag(first.term, second.term, best, correlation),
        max_cross_correlation=best,
        cross_correlation=sweep,
        comparative_stats={
            first.term: _summary(a),
            second.term: _summary(b),
        },
    )

"""
Cross-correlation sweep over integer lags and the lead/lag decision derived from its peak.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from config import settings
from engine.enums import LeadLagStatus
from engine.similarity.pearson import pearson


@dataclass(frozen=True)
class LagCorrelation:
    lag: int
    value: float


@dataclass(frozen=True)
class LeadLag:
    status: LeadLagStatus
    leader: Optional[str] = None
    follower: Optional[str] = None
    lag_periods: int = 0


def max_lag_for(length: int, cap: int | None = None, divisor: int | None = None) -> int:
    if cap is None:
        cap = settings.similarity_max_lag
    if divisor is None:
        divisor = settings.similarity_lag_divisor
    return min(cap, length // divisor)


def _shifted(a: np.ndarray, b: np.ndarray, lag: int) -> Tuple[np.ndarray, np.ndarray]:
    # pairs a[i] with b[i + lag]
    n = len(a)
    if lag >= 0:
        return a[: n - lag], b[lag:]
    return a[-lag:], b[: n + lag]


def cross_correlation(
    a: Sequence[float],
    b: Sequence[float],
    max_lag: int | None = None,
    min_points: int | None = None,
) -> Tuple[List[LagCorrelation], LagCorrelation]:
    """Correlations at each usable lag plus the best one.

    The best lag starts at zero with the unshifted correlation and only moves
    on a strictly greater value.
    """
    x = np.asarray(a, dtype=float)
    y = np.asarray(b, dtype=float)
    if max_lag is None:
        max_lag = max_lag_for(len(x))
    if min_points is None:
        min_points = settings.similarity_min_lag_points

    best = LagCorrelation(lag=0, value=pearson(x, y))
    sweep: List[LagCorrelation] = []
    for lag in range(-max_lag, max_lag + 1):
        left, right = _shifted(x, y, lag)
        if len(left) <= min_points:
            continue
        entry = LagCorrelation(lag=lag, value=pearson(left, right))
        sweep.append(entry)
        if entry.value > best.value:
            best = entry
    return sweep, best


def lead_lag(
    first: str,
    second: str,
    best: LagCorrelation,
    zero_lag: float,
    min_lag: int | None = None,
    gain: float | None = None,
) -> LeadLag:
    if min_lag is None:
        min_lag = settings.similarity_min_lead_lag
    if gain is None:
        gain = settings.similarity_lead_lag_gain
    if abs(best.lag) > min_lag and best.value > zero_lag * gain:
        leader, follower = (second, first) if best.lag < 0 else (first, second)
        return LeadLag(
            status=LeadLagStatus.lagged,
            leader=leader,
            follower=follower,
            lag_periods=abs(best.lag),
        )
    return LeadLag(status=LeadLagStatus.concurrent)

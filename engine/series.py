"""
Core time series types for per-term event counts, including validation of period ordering and calendar-aware stepping of periods by timeframe for forecast dating.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from engine.enums import Timeframe

PeriodLike = Union[datetime, date, str]


def coerce_period(value: PeriodLike) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    raise TypeError(f"Unsupported period type: {type(value).__name__}")


def _add_months(moment: datetime, months: int) -> datetime:
    total = moment.month - 1 + months
    year = moment.year + total // 12
    month = total % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def advance_period(period: datetime, timeframe: Timeframe, steps: int) -> datetime:
    if timeframe is Timeframe.hourly:
        return period + timedelta(hours=steps)
    if timeframe is Timeframe.daily:
        return period + timedelta(days=steps)
    if timeframe is Timeframe.weekly:
        return period + timedelta(weeks=steps)
    return _add_months(period, steps)


@dataclass(frozen=True)
class SeriesPoint:
    period: datetime
    count: int


@dataclass(frozen=True)
class TimeSeries:
    """Ordered counts for one term at one timeframe.

    Periods are strictly increasing and counts are non-negative; a series
    built from store rows is validated once and never mutated afterwards.
    """

    term: str
    timeframe: Timeframe
    points: Tuple[SeriesPoint, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "timeframe", Timeframe.parse(self.timeframe))
        object.__setattr__(self, "points", tuple(self.points))
        previous: Optional[datetime] = None
        for point in self.points:
            if point.count < 0:
                raise ValueError(f"{self.term}: negative count {point.count} at {point.period}")
            if previous is not None and point.period <= previous:
                raise ValueError(f"{self.term}: periods must be strictly increasing ({point.period} after {previous})")
            previous = point.period

    @classmethod
    def from_rows(
        cls,
        term: str,
        timeframe: Timeframe | str,
        rows: Iterable[Tuple[PeriodLike, int]],
    ) -> TimeSeries:
        points = [SeriesPoint(period=coerce_period(p), count=int(c)) for p, c in rows]
        return cls(term=term, timeframe=Timeframe.parse(timeframe), points=tuple(points))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def periods(self) -> List[datetime]:
        return [p.period for p in self.points]

    @property
    def counts(self) -> List[int]:
        return [p.count for p in self.points]

    def values(self) -> np.ndarray:
        return np.array(self.counts, dtype=float)

    @property
    def last_period(self) -> Optional[datetime]:
        return self.points[-1].period if self.points else None

    def future_periods(self, horizon: int) -> List[datetime]:
        last = self.last_period
        if last is None:
            return []
        return [advance_period(last, self.timeframe, step) for step in range(1, horizon + 1)]

    def format_period(self, period: datetime) -> str:
        return period.strftime(self.timeframe.period_format)

    def tail(self, limit: int) -> TimeSeries:
        if limit >= len(self.points):
            return self
        return TimeSeries(term=self.term, timeframe=self.timeframe, points=self.points[-limit:] if limit > 0 else ())


def align(series: Sequence[TimeSeries]) -> Tuple[List[datetime], List[np.ndarray]]:
    """Values of each series restricted to the periods every series shares, in period order."""
    if not series:
        return [], []
    common = set(series[0].periods)
    for s in series[1:]:
        common &= set(s.periods)
    periods = sorted(common)
    aligned: List[np.ndarray] = []
    for s in series:
        lookup = {p.period: p.count for p in s.points}
        aligned.append(np.array([lookup[p] for p in periods], dtype=float))
    return periods, aligned

"""
In-memory series store for development runs and tests.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from datasources.base import SeriesStore
from engine.enums import Timeframe
from engine.series import PeriodLike, SeriesPoint, TimeSeries, coerce_period


class InMemorySeriesStore(SeriesStore):

    def __init__(self) -> None:
        self._counts: Dict[Tuple[str, Timeframe], Dict] = defaultdict(dict)
        self.reads = 0

    def add(self, term: str, timeframe: Timeframe | str, rows: Iterable[Tuple[PeriodLike, int]]) -> None:
        bucket = self._counts[(term, Timeframe.parse(timeframe))]
        for period, count in rows:
            bucket[coerce_period(period)] = int(count)

    async def get_series(self, term: str, timeframe: Timeframe, limit: int) -> TimeSeries:
        tf = Timeframe.parse(timeframe)
        self.reads += 1
        bucket = self._counts.get((term, tf), {})
        recent = sorted(bucket.items())[-limit:] if limit > 0 else []
        return TimeSeries(
            term=term,
            timeframe=tf,
            points=tuple(SeriesPoint(period=p, count=c) for p, c in recent),
        )

    async def top_terms(self, limit: int) -> List[str]:
        totals: Dict[str, int] = defaultdict(int)
        for (term, tf), bucket in self._counts.items():
            if tf is Timeframe.daily:
                totals[term] += sum(bucket.values())
        ranked = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))
        return [term for term, _ in ranked[:limit]]

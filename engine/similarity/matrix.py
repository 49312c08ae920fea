"""
Pairwise Pearson correlation matrix across many terms aligned on the periods they all share.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import combinations
from typing import Dict, List, Sequence

from config import settings
from engine.result import Result, insufficient_data
from engine.series import TimeSeries, align
from engine.similarity.compare import overlap_failure
from engine.similarity.pearson import pearson

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorrelationMatrix:
    terms: List[str]
    values: Dict[str, Dict[str, float]]
    data_points: int
    missing: List[str] = field(default_factory=list)

    def get(self, first: str, second: str) -> float:
        return self.values[first][second]


def correlation_matrix(
    series: Sequence[TimeSeries],
    min_overlap: int | None = None,
) -> Result[CorrelationMatrix]:
    if min_overlap is None:
        min_overlap = settings.similarity_min_overlap

    present = [s for s in series if len(s) > 0]
    missing = [s.term for s in series if len(s) == 0]
    if missing:
        log.info("correlation matrix: no data for %s", ", ".join(missing))
    if not present:
        return insufficient_data(terms=missing)

    periods, aligned = align(present)
    if len(periods) < min_overlap:
        return overlap_failure(len(periods), min_overlap)

    terms = [s.term for s in present]
    values: Dict[str, Dict[str, float]] = {t: {t: 1.0} for t in terms}
    for (i, first), (j, second) in combinations(enumerate(terms), 2):
        r = pearson(aligned[i], aligned[j])
        values[first][second] = r
        values[second][first] = r

    return CorrelationMatrix(terms=terms, values=values, data_points=len(periods), missing=missing)

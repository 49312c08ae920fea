"""
Per-session cache of the most recently retrieved series for each term, so that several computations on the same term and timeframe share a single store read.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Tuple

from engine.enums import Timeframe
from engine.series import TimeSeries

log = logging.getLogger(__name__)


class SeriesCache:
    """One entry per term; requesting another timeframe for a term replaces its entry."""

    __slots__ = ("_entries", "_lock")

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[Timeframe, int, TimeSeries]] = {}
        self._lock = threading.Lock()

    def get(self, term: str, timeframe: Timeframe, min_limit: int = 0) -> Optional[TimeSeries]:
        with self._lock:
            entry = self._entries.get(term)
        if entry is None:
            return None
        cached_timeframe, limit, series = entry
        if cached_timeframe is not timeframe:
            return None
        # a short read can only be reused when the store had nothing more to give
        if limit < min_limit and len(series) >= limit:
            return None
        log.debug("series cache hit term=%s timeframe=%s points=%d", term, timeframe.value, len(series))
        return series

    def put(self, series: TimeSeries, limit: int) -> None:
        with self._lock:
            replaced = self._entries.get(series.term)
            self._entries[series.term] = (series.timeframe, limit, series)
        if replaced is not None and replaced[0] is not series.timeframe:
            log.debug("series cache replaced term=%s %s -> %s", series.term, replaced[0].value, series.timeframe.value)

    def invalidate(self, term: Optional[str] = None) -> None:
        with self._lock:
            if term is None:
                self._entries.clear()
            else:
                self._entries.pop(term, None)

    def __contains__(self, key: Tuple[str, Timeframe]) -> bool:
        term, timeframe = key
        with self._lock:
            entry = self._entries.get(term)
        return entry is not None and entry[0] is timeframe

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

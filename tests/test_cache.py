"""
Tests for the per-instance series cache.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.cache import SeriesCache
from engine.enums import Timeframe


def test_hit_and_timeframe_mismatch(make_series):
    cache = SeriesCache()
    s = make_series([1, 2, 3], term="a")
    cache.put(s, limit=90)
    assert cache.get("a", Timeframe.daily) is s
    assert cache.get("a", Timeframe.weekly) is None
    assert cache.get("b", Timeframe.daily) is None
    assert ("a", Timeframe.daily) in cache


def test_other_timeframe_replaces_entry(make_series):
    cache = SeriesCache()
    cache.put(make_series([1, 2], term="a"), limit=90)
    weekly = make_series([5, 6], term="a", timeframe="weekly")
    cache.put(weekly, limit=90)
    assert len(cache) == 1
    assert ("a", Timeframe.daily) not in cache
    assert cache.get("a", Timeframe.weekly) is weekly


def test_truncated_read_is_not_reused_for_longer_request(make_series):
    cache = SeriesCache()
    cache.put(make_series(range(5), term="a"), limit=5)
    assert cache.get("a", Timeframe.daily, min_limit=5) is not None
    assert cache.get("a", Timeframe.daily, min_limit=10) is None


def test_short_history_is_reused_for_longer_request(make_series):
    cache = SeriesCache()
    s = make_series(range(3), term="a")
    cache.put(s, limit=5)
    assert cache.get("a", Timeframe.daily, min_limit=10) is s


def test_invalidate(make_series):
    cache = SeriesCache()
    cache.put(make_series([1], term="a"), limit=1)
    cache.put(make_series([1], term="b"), limit=1)
    cache.invalidate("a")
    assert len(cache) == 1
    cache.invalidate()
    assert len(cache) == 0

import fnmatch
import os
import sys
from datetime import datetime

import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from engine.enums import Timeframe
from engine.series import TimeSeries, advance_period
from store.client import _fallback


@pytest.fixture(autouse=True)
def clear_fallback(monkeypatch):
    """Wipe the in-memory redis fallback before and after each test and override
    the redis helpers so they always operate on the in-memory store.
    """
    _fallback.clear()

    import store.client as client
    import store.forecasts as fstore

    async def fake_get(key: str):
        return _fallback.get(key)

    async def fake_set(key: str, value: str, ttl=None):
        _fallback[key] = value

    async def fake_delete(key: str):
        _fallback.pop(key, None)

    async def fake_scan(pattern: str):
        return [k for k in _fallback if fnmatch.fnmatch(k, pattern)]

    fakes = {
        "redis_get": fake_get,
        "redis_set": fake_set,
        "redis_delete": fake_delete,
        "redis_scan": fake_scan,
    }
    # modules that imported the helpers by name need patching too
    for mod in (client, fstore):
        for name, fake in fakes.items():
            if hasattr(mod, name):
                monkeypatch.setattr(mod, name, fake)

    yield

    _fallback.clear()


@pytest.fixture
def make_series():
    """Build a TimeSeries from plain counts on consecutive periods."""

    def _make(values, term="term", timeframe=Timeframe.daily, start=datetime(2024, 1, 1)):
        tf = Timeframe.parse(timeframe)
        rows = [(advance_period(start, tf, i), v) for i, v in enumerate(values)]
        return TimeSeries.from_rows(term, tf, rows)

    return _make

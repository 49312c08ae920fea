"""
Tests for series store construction from configuration.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

import database
from config import STORE_BACKEND_MEMORY, STORE_BACKEND_SQL
from datasources.factory import SeriesStoreFactory
from datasources.memory import InMemorySeriesStore
from datasources.sql import SqlSeriesStore


def test_factory_builds_memory_store():
    cfg = SimpleNamespace(store_backend=STORE_BACKEND_MEMORY, database_url=None)
    assert isinstance(SeriesStoreFactory.create(cfg), InMemorySeriesStore)


def test_factory_builds_sql_store(monkeypatch):
    captured = {}
    monkeypatch.setattr(database, "init_database", lambda url: captured.setdefault("url", url))

    cfg = SimpleNamespace(store_backend=STORE_BACKEND_SQL, database_url="sqlite:///trendcast.db")
    assert isinstance(SeriesStoreFactory.create(cfg), SqlSeriesStore)
    assert captured["url"] == "sqlite:///trendcast.db"


def test_factory_requires_database_url_for_sql():
    cfg = SimpleNamespace(store_backend=STORE_BACKEND_SQL, database_url="")
    with pytest.raises(ValueError):
        SeriesStoreFactory.create(cfg)


def test_factory_rejects_unknown_backend():
    cfg = SimpleNamespace(store_backend="cassandra", database_url=None)
    with pytest.raises(ValueError, match="Unsupported store backend"):
        SeriesStoreFactory.create(cfg)

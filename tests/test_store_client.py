"""
Tests for the Redis client and its in-memory fallback.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from store import client as store_client
from store.client import _fallback, redis_delete, redis_get, redis_scan, redis_set


@pytest.fixture
def no_redis(monkeypatch):
    async def unavailable():
        return None

    monkeypatch.setattr(store_client, "get_redis", unavailable)
    _fallback.clear()


class _FailingClient:

    async def get(self, key):
        raise ConnectionError("reset")

    async def set(self, key, value):
        raise ConnectionError("reset")

    async def setex(self, key, ttl, value):
        raise ConnectionError("reset")


@pytest.mark.asyncio
async def test_fallback_operations(no_redis):
    await redis_set("tc:forecast:a:daily:ensemble", "{}")
    assert await redis_get("tc:forecast:a:daily:ensemble") == "{}"
    await redis_delete("tc:forecast:a:daily:ensemble")
    assert await redis_get("tc:forecast:a:daily:ensemble") is None


@pytest.mark.asyncio
async def test_fallback_scan_matches_pattern(no_redis):
    await redis_set("tc:forecast:a:daily:ensemble", "1")
    await redis_set("tc:forecast:a:weekly:ensemble", "2")
    await redis_set("tc:forecast:b:daily:ensemble", "3")
    found = await redis_scan("tc:forecast:a:*")
    assert sorted(found) == ["tc:forecast:a:daily:ensemble", "tc:forecast:a:weekly:ensemble"]


@pytest.mark.asyncio
async def test_fallback_capacity(no_redis, monkeypatch):
    monkeypatch.setattr(store_client.settings, "store_fallback_max_items", 1)
    await redis_set("a", "1")
    await redis_set("b", "2")
    assert await redis_get("b") is None
    # existing keys can still be overwritten when full
    await redis_set("a", "3")
    assert await redis_get("a") == "3"


@pytest.mark.asyncio
async def test_command_errors_fall_back_to_memory(monkeypatch):
    async def failing():
        return _FailingClient()

    monkeypatch.setattr(store_client, "get_redis", failing)
    _fallback.clear()
    await redis_set("k", "v", ttl=30)
    assert _fallback["k"] == "v"
    assert await redis_get("k") == "v"

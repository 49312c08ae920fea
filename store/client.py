"""
Redis access for published forecasts, degrading to a bounded in-process dict while Redis is unreachable.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import fnmatch
import logging
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar

from config import REDIS_URL, settings

log = logging.getLogger(__name__)

T = TypeVar("T")

_redis_client: Any = None
_fallback: dict[str, str] = {}
_using_fallback = False
_connect_lock = asyncio.Lock()
# monotonic deadline before which no reconnect is attempted
_next_connect_at: float = 0.0


def _cooling_down() -> bool:
    return time.monotonic() < _next_connect_at


async def _connect() -> Any:
    import redis.asyncio as aioredis

    timeout = settings.store_redis_op_timeout_seconds
    client = aioredis.from_url(
        REDIS_URL,
        decode_responses=True,
        socket_connect_timeout=timeout,
        socket_timeout=timeout,
    )
    await asyncio.wait_for(client.ping(), timeout=timeout)
    return client


async def get_redis() -> Any:
    global _redis_client, _using_fallback, _next_connect_at

    if _redis_client is not None:
        return _redis_client
    if _cooling_down():
        _using_fallback = True
        return None

    async with _connect_lock:
        if _redis_client is not None:
            return _redis_client
        if _cooling_down():
            return None
        try:
            _redis_client = await _connect()
        except Exception as exc:
            _next_connect_at = time.monotonic() + max(0.0, settings.store_redis_retry_cooldown_seconds)
            if not _using_fallback:
                log.warning("Redis unavailable at %s (%s), keeping forecasts in memory", REDIS_URL, exc)
            _using_fallback = True
            return None
        _next_connect_at = 0.0
        _using_fallback = False
        log.info("Redis connected: %s", REDIS_URL)
        return _redis_client


async def close_redis() -> None:
    global _redis_client
    client, _redis_client = _redis_client, None
    if client is not None:
        await client.aclose()


def _remember(key: str, value: str) -> None:
    if key in _fallback or len(_fallback) < settings.store_fallback_max_items:
        _fallback[key] = value
    else:
        log.debug("fallback full, dropping %s", key)


def _matching(pattern: str) -> list[str]:
    return [k for k in _fallback if fnmatch.fnmatch(k, pattern)]


async def _run(op: str, key: str, call: Callable[[Any], Awaitable[T]], fallback: Callable[[], T]) -> T:
    client = await get_redis()
    if client is None:
        return fallback()
    try:
        return await asyncio.wait_for(call(client), timeout=settings.store_redis_op_timeout_seconds)
    except Exception as exc:
        log.debug("Redis %s error %s: %s", op, key, exc)
        return fallback()


async def redis_get(key: str) -> Optional[str]:
    return await _run("GET", key, lambda c: c.get(key), lambda: _fallback.get(key))


async def redis_set(key: str, value: str, ttl: Optional[int] = None) -> None:
    def write(client: Any) -> Awaitable[Any]:
        return client.setex(key, ttl, value) if ttl else client.set(key, value)

    await _run("SET", key, write, lambda: _remember(key, value))


async def redis_delete(key: str) -> None:
    await _run("DEL", key, lambda c: c.delete(key), lambda: _fallback.pop(key, None))


async def redis_scan(pattern: str) -> list[str]:
    async def scan(client: Any) -> list[str]:
        return [key async for key in client.scan_iter(match=pattern)]

    return await _run("SCAN", pattern, scan, lambda: _matching(pattern))


def is_using_fallback() -> bool:
    return _using_fallback

"""
Published forecast payloads keyed by term, timeframe and model, stored as JSON with an expiry.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from config import FORECAST_TTL
from store import keys
from store.client import redis_delete, redis_get, redis_scan, redis_set

log = logging.getLogger(__name__)


async def save(term: str, timeframe: str, model: str, payload: Dict[str, Any], ttl: int | None = None) -> str:
    key = keys.forecast(term, timeframe, model)
    await redis_set(key, json.dumps(payload), ttl=FORECAST_TTL if ttl is None else ttl)
    return key


async def load(term: str, timeframe: str, model: str) -> Optional[Dict[str, Any]]:
    raw = await redis_get(keys.forecast(term, timeframe, model))
    if not raw:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        log.warning("Discarding unreadable forecast for %s/%s/%s: %s", term, timeframe, model, exc)
        return None


async def clear(term: str) -> List[str]:
    removed = await redis_scan(keys.forecasts(term))
    for key in removed:
        await redis_delete(key)
    return removed

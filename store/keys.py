"""
Key layout for forecasts published to the key-value store.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import hashlib


def _slug(value: str) -> str:
    return hashlib.sha256(value.encode()).hexdigest()[:32]


def forecast(term: str, timeframe: str, model: str) -> str:
    return f"tc:forecast:{_slug(term)}:{timeframe}:{model}"


def forecasts(term: str) -> str:
    return f"tc:forecast:{_slug(term)}:*"

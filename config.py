"""
Constants and configuration for Trendcast.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict, List, Optional, Tuple

from pydantic_settings import BaseSettings


REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
FORECAST_TTL: int = int(os.getenv("FORECAST_TTL", "86400"))

STORE_BACKEND_MEMORY = "memory"
STORE_BACKEND_SQL = "sql"

TRENDCAST_STORE_BACKEND = os.getenv("TRENDCAST_STORE_BACKEND", STORE_BACKEND_SQL).lower()
TRENDCAST_DATABASE_URL = os.getenv("TRENDCAST_DATABASE_URL", "")

# z values for the confidence levels the interval builder knows by name
CONFIDENCE_Z_SCORES: Dict[float, float] = {
    0.90: 1.645,
    0.95: 1.96,
    0.99: 2.576,
}

# strength labels for |r|, checked top-down with a strict ">" comparison
CORRELATION_STRENGTH_BANDS: List[Tuple[float, str]] = [
    (0.9, "very strong"),
    (0.7, "strong"),
    (0.5, "moderate"),
    (0.3, "weak"),
]


class Settings(BaseSettings):
    store_backend: str = TRENDCAST_STORE_BACKEND
    database_url: Optional[str] = TRENDCAST_DATABASE_URL or None

    # store reads
    history_limit: int = 90
    store_retry_attempts: int = 3
    store_retry_delay: float = 0.5
    store_retry_backoff: float = 2.0
    top_terms_window_days: int = 30

    # connection pool for non-sqlite databases
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_timeout: int = 30
    db_pool_recycle: int = 1800

    # key-value store for published forecasts
    store_fallback_max_items: int = 10_000
    store_redis_retry_cooldown_seconds: float = 10.0
    store_redis_op_timeout_seconds: float = 0.5

    # statistics
    stats_ma_windows: Tuple[int, int] = (7, 30)
    stats_outlier_z: float = 3.0
    stats_trend_strong: float = 0.1
    stats_trend_moderate: float = 0.01

    # rolling anomaly detection
    anomaly_window_divisor: float = 3.0
    anomaly_window_min: int = 7
    anomaly_window_max: int = 30
    anomaly_sigma: float = 3.0

    # smoothing constants shared by the Holt and Holt-Winters models
    smoothing_alpha: float = 0.7
    smoothing_beta: float = 0.3
    smoothing_gamma: float = 0.4
    season_length: int = 7
    # Holt-Winters asks the store for this many seasons of history
    seasonal_history_seasons: int = 4

    forecast_default_horizon: int = 30
    forecast_max_horizon: int = 365

    # prediction intervals
    interval_default_confidence: float = 0.95
    interval_horizon_growth: float = 0.05
    interval_proxy_window: int = 7

    # similarity
    similarity_min_overlap: int = 7
    similarity_max_lag: int = 30
    similarity_lag_divisor: int = 4
    similarity_min_lag_points: int = 7
    similarity_min_lead_lag: int = 1
    similarity_lead_lag_gain: float = 1.1

    # nightly batch forecast
    batch_top_terms: int = 100
    batch_horizon: int = 90
    batch_timeframes: List[str] = ["daily", "weekly", "monthly"]

    model_config = {
        "env_prefix": "TRENDCAST_",
        "extra": "ignore",
    }


settings = Settings()

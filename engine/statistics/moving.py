"""
Moving-window helpers for time series values: simple moving averages with undefined leading slots, and trailing rolling mean/standard deviation computed with pre-sized numpy buffers.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np


def moving_average(values: Sequence[float], window: int) -> List[Optional[float]]:
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    arr = np.asarray(values, dtype=float)
    out: List[Optional[float]] = [None] * len(arr)
    if len(arr) < window:
        return out
    means = np.lib.stride_tricks.sliding_window_view(arr, window).mean(axis=1)
    for i, m in enumerate(means, start=window - 1):
        out[i] = float(m)
    return out


def rolling_mean_std(values: Sequence[float], window: int) -> Tuple[np.ndarray, np.ndarray]:
    """Population mean and std of the trailing window ending at each index >= window-1.

    Slots before window-1 hold NaN.
    """
    arr = np.asarray(values, dtype=float)
    n = len(arr)
    means = np.full(n, np.nan)
    stds = np.full(n, np.nan)
    if window < 1 or n < window:
        return means, stds
    windows = np.lib.stride_tricks.sliding_window_view(arr, window)
    means[window - 1 :] = windows.mean(axis=1)
    stds[window - 1 :] = windows.std(axis=1)
    return means, stds

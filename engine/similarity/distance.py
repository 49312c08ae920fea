"""
Shape distances between aligned series: max-normalization, Euclidean distance, cosine similarity and dynamic time warping.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


def normalize(values: Sequence[float]) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if len(arr) == 0:
        return arr
    peak = arr.max()
    if peak <= 0:
        return np.zeros_like(arr)
    return arr / peak


def euclidean(a: Sequence[float], b: Sequence[float]) -> float:
    return float(np.sqrt(np.sum((np.asarray(a, dtype=float) - np.asarray(b, dtype=float)) ** 2)))


def cosine(a: Sequence[float], b: Sequence[float]) -> float:
    x = np.asarray(a, dtype=float)
    y = np.asarray(b, dtype=float)
    magnitude = float(np.linalg.norm(x) * np.linalg.norm(y))
    if magnitude == 0:
        return 0.0
    return float(np.dot(x, y) / magnitude)


def dtw(a: Sequence[float], b: Sequence[float]) -> float:
    """Dynamic time warping distance with absolute-difference cost.

    The (n+1) x (m+1) cost matrix is allocated once; row and column zero stay
    at infinity apart from the origin.
    """
    x = np.asarray(a, dtype=float)
    y = np.asarray(b, dtype=float)
    n, m = len(x), len(y)
    acc = np.full((n + 1, m + 1), np.inf)
    acc[0, 0] = 0.0
    cost = np.abs(x[:, None] - y[None, :])
    for i in range(1, n + 1):
        for j in range(1, m + 1):
            acc[i, j] = cost[i - 1, j - 1] + min(acc[i - 1, j], acc[i, j - 1], acc[i - 1, j - 1])
    return float(acc[n, m])

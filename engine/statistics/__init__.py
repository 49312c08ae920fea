"""
Descriptive statistics for term count series, including moving averages, linear trend classification, growth rate and z-score outliers.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.statistics.describe import BasicStats, LinearTrend, Outlier, SeriesStatistics, describe
from engine.statistics.moving import moving_average, rolling_mean_std

__all__ = [
    "BasicStats", "LinearTrend", "Outlier", "SeriesStatistics", "describe",
    "moving_average", "rolling_mean_std",
]

"""
Base contract for the series store the predictor reads aggregated term counts from.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from abc import ABC, abstractmethod
from typing import List

from engine.enums import Timeframe
from engine.series import TimeSeries


class SeriesStore(ABC):

    @abstractmethod
    async def get_series(self, term: str, timeframe: Timeframe, limit: int) -> TimeSeries:
        """Most recent ``limit`` points for ``term`` in ascending period order.

        Missing periods are left out rather than zero-filled, and an unknown
        term yields an empty series.
        """

    @abstractmethod
    async def top_terms(self, limit: int) -> List[str]: ...

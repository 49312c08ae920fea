"""
Tests for enumerations used across the engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from datasources.exceptions import InvalidTimeframe, SeriesStoreError
from engine.enums import ErrorKind, ForecastModel, ModelType, Timeframe


def test_timeframe_parse():
    assert Timeframe.parse("Daily ") is Timeframe.daily
    assert Timeframe.parse(Timeframe.hourly) is Timeframe.hourly


def test_timeframe_parse_invalid():
    with pytest.raises(InvalidTimeframe) as exc:
        Timeframe.parse("fortnightly")
    assert isinstance(exc.value, ValueError)
    assert isinstance(exc.value, SeriesStoreError)


def test_enum_values():
    assert [m.value for m in ForecastModel] == ["exponential", "linear", "holtwinters", "ensemble"]
    assert ModelType.double_exponential_smoothing.value == "double_exponential_smoothing"
    assert ErrorKind.insufficient_overlap == "insufficient_overlap"

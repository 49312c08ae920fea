"""
Tagged failure values returned by engine operations in place of a result when the input series has the wrong shape for the requested computation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, TypeVar, Union

from engine.enums import ErrorKind

T = TypeVar("T")

NOT_ENOUGH_DATA = "Not enough historical data"
NOT_ENOUGH_SEASONAL_DATA = "Not enough historical data for seasonal analysis"
INSUFFICIENT_OVERLAP = "Insufficient overlapping data points"
INSUFFICIENT_TERM_DATA = "Insufficient data for one or both terms"
ENSEMBLE_FAILED = "One or more models failed to generate a forecast"


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    reason: str
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.reason


Result = Union[T, Failure]


def is_failure(value: Any) -> bool:
    return isinstance(value, Failure)


def insufficient_data(reason: str = NOT_ENOUGH_DATA, **details: Any) -> Failure:
    return Failure(kind=ErrorKind.insufficient_data, reason=reason, details=details)

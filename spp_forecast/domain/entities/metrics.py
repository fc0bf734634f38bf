"""Value objects produced by the statistics service."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class DailyStats:
    """Summary of a day's values. All fields are NaN when the day is empty."""

    min: float
    max: float
    avg: float
    std: float

    @classmethod
    def empty(cls) -> "DailyStats":
        nan = float("nan")
        return cls(min=nan, max=nan, avg=nan, std=nan)

    @property
    def is_empty(self) -> bool:
        return math.isnan(self.avg)


@dataclass(frozen=True, slots=True)
class BacktestResult:
    """Accuracy of a forecast against realized actuals.

    ``mape`` is None when no actual value was usable as a denominator.
    """

    mae: float
    mape: Optional[float]
    sample_count: int

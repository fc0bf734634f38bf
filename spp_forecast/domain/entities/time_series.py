"""Domain entities for 15-minute price series."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SlotSource(str, Enum):
    """Where a forecast slot value came from."""

    OBSERVED = "observed"
    CARRIED_FORWARD = "carried_forward"
    ZERO_FILL = "zero_fill"


@dataclass(frozen=True, slots=True)
class Observation:
    """A realized settlement point price for one 15-minute interval."""

    timestamp: datetime
    value: float


@dataclass(frozen=True, slots=True)
class ForecastPoint:
    """One slot of a daily forecast.

    ``timestamp`` is always a slot boundary (00:00, 00:15, ... 23:45) on the
    forecast day.
    """

    timestamp: datetime
    value: float
    source: SlotSource = SlotSource.OBSERVED

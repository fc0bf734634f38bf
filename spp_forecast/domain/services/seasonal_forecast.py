"""Seasonal baseline forecast for one day of 15-minute prices.

Each slot of the target day is predicted as the mean of the same slot on the
same weekday over the previous ``weeks_lookback`` weeks. Slots without any
matching history carry the previous slot's value forward, so the result is
always a complete day.

The engine is pure: the live forecast and the backtest call it with the same
code, only the target day and the history differ.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List, Tuple

import numpy as np

from spp_forecast.domain.entities.time_series import (
    ForecastPoint,
    Observation,
    SlotSource,
)

SLOTS_PER_DAY = 96
MINUTES_PER_SLOT = 15
DEFAULT_WEEKS_LOOKBACK = 4
ZERO_FALLBACK = 0.0


def slot_index(timestamp: datetime) -> int:
    """Slot of a timestamp within its day, from its wall-clock hour and minute."""
    return timestamp.hour * 4 + timestamp.minute // MINUTES_PER_SLOT


def _to_target_clock(timestamp: datetime, target_day_start: datetime) -> datetime:
    tz = target_day_start.tzinfo
    if tz is None:
        # Naive target: compare on the observation's own wall clock.
        return timestamp.replace(tzinfo=None)
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=tz)
    return timestamp.astimezone(tz)


def _accumulate(
    target_day_start: datetime,
    history: Iterable[Observation],
    weeks_lookback: int,
) -> Tuple[np.ndarray, np.ndarray]:
    target_dow = target_day_start.weekday()
    cutoff = target_day_start - timedelta(days=weeks_lookback * 7)

    sums = np.zeros(SLOTS_PER_DAY, dtype=float)
    counts = np.zeros(SLOTS_PER_DAY, dtype=int)

    for observation in history:
        local = _to_target_clock(observation.timestamp, target_day_start)
        if local < cutoff or local >= target_day_start:
            continue
        if local.weekday() != target_dow:
            continue

        slot = slot_index(local)
        if slot < 0 or slot >= SLOTS_PER_DAY:
            continue

        sums[slot] += observation.value
        counts[slot] += 1

    return sums, counts


def _carry_forward_seed(sums: np.ndarray, counts: np.ndarray) -> float:
    populated = np.flatnonzero(counts)
    if populated.size == 0:
        return ZERO_FALLBACK
    first = int(populated[0])
    return float(sums[first] / counts[first])


def build_seasonal_forecast(
    target_day_start: datetime,
    history: Iterable[Observation],
    weeks_lookback: int = DEFAULT_WEEKS_LOOKBACK,
) -> List[ForecastPoint]:
    """
    Forecast the 96 slots of the day starting at ``target_day_start``.

    Args:
        target_day_start: Local midnight of the day to forecast. Its tzinfo
            defines the wall clock used for weekdays, slots and the emitted
            timestamps. Naive history is read on that clock; aware history
            against a naive target is read on its own wall clock.
        history: Observations in any order and on any date; only those in
            ``[target_day_start - weeks_lookback weeks, target_day_start)``
            falling on the same weekday are used.
        weeks_lookback: Number of weeks of history to average over.

    Returns:
        Exactly 96 points ordered by slot. Slots without data repeat the
        value of the previous slot; leading empty slots take the mean of the
        first populated slot; a day without any data is all zeros.

    Raises:
        ValueError: If ``weeks_lookback`` is not a positive integer.
    """
    if weeks_lookback < 1:
        raise ValueError("weeks_lookback must be a positive integer")

    sums, counts = _accumulate(target_day_start, history, weeks_lookback)

    any_data = bool(counts.any())
    last_value = _carry_forward_seed(sums, counts)

    base = target_day_start.replace(hour=0, minute=0, second=0, microsecond=0)

    points: List[ForecastPoint] = []
    for slot in range(SLOTS_PER_DAY):
        if counts[slot] > 0:
            value = float(sums[slot] / counts[slot])
            source = SlotSource.OBSERVED
        else:
            value = last_value
            source = SlotSource.CARRIED_FORWARD if any_data else SlotSource.ZERO_FILL
        last_value = value

        points.append(
            ForecastPoint(
                timestamp=base + timedelta(minutes=slot * MINUTES_PER_SLOT),
                value=value,
                source=source,
            )
        )

    return points


def has_observed_slots(points: Iterable[ForecastPoint]) -> bool:
    """True when at least one slot was computed from real history."""
    return any(point.source is SlotSource.OBSERVED for point in points)

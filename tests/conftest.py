from __future__ import annotations

import sys
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence
from zoneinfo import ZoneInfo

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from spp_forecast.domain.entities.time_series import Observation  # noqa: E402

CHICAGO = ZoneInfo("America/Chicago")


def day_observations(
    day: date,
    values: Sequence[float],
    tz: ZoneInfo = CHICAGO,
    slots: Optional[Iterable[int]] = None,
) -> List[Observation]:
    """Observations for ``day``, one per slot, starting at local midnight."""
    midnight = datetime(day.year, day.month, day.day, tzinfo=tz)
    slot_numbers = list(slots) if slots is not None else list(range(len(values)))
    return [
        Observation(timestamp=midnight + timedelta(minutes=15 * slot), value=value)
        for slot, value in zip(slot_numbers, values)
    ]


def constant_day(day: date, value: float, tz: ZoneInfo = CHICAGO) -> List[Observation]:
    return day_observations(day, [value] * 96, tz)


class StubPriceGateway:
    """Serves canned days and records which days were requested."""

    def __init__(
        self,
        days: Optional[Dict[date, List[Observation]]] = None,
        settlement_point: str = "HB_WEST",
        error: Optional[Exception] = None,
    ) -> None:
        self._days = days or {}
        self._settlement_point = settlement_point
        self._error = error
        self.requested: List[date] = []

    @property
    def settlement_point(self) -> str:
        return self._settlement_point

    async def fetch_day(self, day: date) -> List[Observation]:
        self.requested.append(day)
        if self._error is not None:
            raise self._error
        return list(self._days.get(day, []))


@pytest.fixture()
def market_tz() -> ZoneInfo:
    return CHICAGO


@pytest.fixture()
def fixed_now() -> datetime:
    # Tuesday
    return datetime(2026, 2, 17, 9, 30, tzinfo=CHICAGO)


def forecast_payload(
    actual_intervals: Iterable[int] = range(1, 97),
    mape: Optional[float] = 12.5,
) -> Dict:
    """A ``/forecast`` document as the dashboard receives it."""
    forecast = [
        {
            "timestamp": f"2026-02-17T{slot // 4:02d}:{slot % 4 * 15:02d}:00-06:00",
            "value": 20.0 + slot,
            "source": "observed",
        }
        for slot in range(96)
    ]
    points = [
        {
            "timestamp": f"2026-02-10T{(i - 1) // 4:02d}:{(i - 1) % 4 * 15:02d}:00-06:00",
            "value": 10.0 + i,
            "interval": i,
        }
        for i in actual_intervals
    ]
    return {
        "settlement_point": "HB_WEST",
        "date": "2026-02-17",
        "data_mode": "ercot-np6-905",
        "generated_at": "2026-02-17T15:30:00Z",
        "forecast": forecast,
        "actuals": {"date": "2026-02-10", "points": points},
        "stats": {
            "forecast": {"min": 20.0, "max": 115.0, "avg": 67.5, "std": 27.7},
            "actuals": {"min": None, "max": None, "avg": None, "std": None},
        },
        "backtest": {
            "date": "2026-02-10",
            "mae": 4.25,
            "mape": mape,
            "actual_count": len(points),
            "sample_count": len(points),
        },
    }


def dates_payload() -> Dict:
    return {
        "today": "2026-02-17",
        "min": "2026-02-17",
        "max": "2026-02-24",
        "dates": [
            {"date": "2026-02-17", "weekday": "Tue", "label": "Feb 17"},
            {"date": "2026-02-18", "weekday": "Wed", "label": "Feb 18"},
        ],
    }

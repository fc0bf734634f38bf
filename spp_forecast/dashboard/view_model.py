"""
Dashboard - view model

Turns the ``/forecast`` and ``/forecast/dates`` JSON documents into the
frames and labels the Streamlit page renders. Kept free of Streamlit so it can
be tested on its own.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

SLOTS_PER_DAY = 96
MISSING = "—"

STAT_FIELDS = (("Min", "min"), ("Max", "max"), ("Avg", "avg"), ("Std", "std"))


@dataclass(frozen=True)
class DateOption:
    value: str
    caption: str


def format_number(value: Optional[float]) -> str:
    """Two decimals, or a dash for null/NaN statistics."""
    if value is None or not math.isfinite(value):
        return MISSING
    return f"{value:.2f}"


def format_mape(value: Optional[float]) -> str:
    if value is None or not math.isfinite(value):
        return "n/a"
    return f"{value:.2f}%"


def slot_label(slot: int) -> str:
    return f"{slot // 4:02d}:{(slot % 4) * 15:02d}"


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def date_options(payload: Mapping[str, Any]) -> List[DateOption]:
    return [
        DateOption(
            value=str(option["date"]),
            caption=f"{option['weekday']} {option['label']}",
        )
        for option in payload.get("dates", [])
    ]


def default_date_index(options: Sequence[DateOption], today: str) -> int:
    for index, option in enumerate(options):
        if option.value == today:
            return index
    return 0


def chart_frame(payload: Mapping[str, Any]) -> pd.DataFrame:
    """
    Forecast and last week's actuals on one time-of-day axis.

    Actual points are placed by their ``interval`` so a day with missing
    intervals leaves gaps instead of shifting the curve.
    """
    forecast = [point["value"] for point in payload.get("forecast", [])]
    forecast += [math.nan] * (SLOTS_PER_DAY - len(forecast))

    actual = [math.nan] * SLOTS_PER_DAY
    for point in payload.get("actuals", {}).get("points", []):
        slot = int(point["interval"]) - 1
        if 0 <= slot < SLOTS_PER_DAY:
            actual[slot] = point["value"]

    return pd.DataFrame(
        {
            "time": [slot_label(slot) for slot in range(SLOTS_PER_DAY)],
            "forecast": forecast[:SLOTS_PER_DAY],
            "actual": actual,
        }
    )


def interval_table(payload: Mapping[str, Any]) -> pd.DataFrame:
    rows = [
        {
            "Timestamp": _parse_timestamp(point["timestamp"]).strftime("%Y-%m-%d %H:%M"),
            "Forecast": round(point["value"], 2),
            "Source": point.get("source", ""),
        }
        for point in payload.get("forecast", [])
    ]
    return pd.DataFrame(rows, columns=["Timestamp", "Forecast", "Source"])


def stat_rows(stats: Optional[Mapping[str, Any]]) -> List[Tuple[str, str]]:
    stats = stats or {}
    return [(label, format_number(stats.get(key))) for label, key in STAT_FIELDS]


def backtest_rows(backtest: Mapping[str, Any]) -> List[Tuple[str, str]]:
    return [
        ("MAE", format_number(backtest.get("mae"))),
        ("MAPE", format_mape(backtest.get("mape"))),
        ("Pairs compared", str(backtest.get("sample_count", 0))),
    ]


def actuals_caption(payload: Mapping[str, Any]) -> str:
    actuals: Dict[str, Any] = payload.get("actuals", {})
    count = payload.get("backtest", {}).get("actual_count", len(actuals.get("points", [])))
    return f"{actuals.get('date', '')} • {count} points"

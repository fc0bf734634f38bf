"""
Domain Services Package

Pure computations over price series: the seasonal forecast engine and the
statistics used to summarise and evaluate it.
"""

from .seasonal_forecast import (
    DEFAULT_WEEKS_LOOKBACK,
    MINUTES_PER_SLOT,
    SLOTS_PER_DAY,
    build_seasonal_forecast,
    has_observed_slots,
    slot_index,
)
from .statistics import DEFAULT_MAPE_EPSILON, backtest, daily_stats, mae, mape

__all__ = [
    "DEFAULT_MAPE_EPSILON",
    "DEFAULT_WEEKS_LOOKBACK",
    "MINUTES_PER_SLOT",
    "SLOTS_PER_DAY",
    "backtest",
    "build_seasonal_forecast",
    "daily_stats",
    "has_observed_slots",
    "mae",
    "mape",
    "slot_index",
]

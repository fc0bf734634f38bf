"""
Domain Entities Package

Price observations, forecast points, summary statistics and health values.
"""

from .errors import DomainError, PriceHistoryError, PriceHistoryTimeoutError
from .health import ApplicationInfo, DependencyStatus, ServiceStatus, SystemHealth
from .metrics import BacktestResult, DailyStats
from .time_series import ForecastPoint, Observation, SlotSource

__all__ = [
    "Observation",
    "ForecastPoint",
    "SlotSource",
    "DailyStats",
    "BacktestResult",
    "SystemHealth",
    "DependencyStatus",
    "ServiceStatus",
    "ApplicationInfo",
    "DomainError",
    "PriceHistoryError",
    "PriceHistoryTimeoutError",
]

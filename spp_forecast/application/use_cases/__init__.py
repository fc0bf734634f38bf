"""
Use Cases Package - Application Layer

Use cases orchestrate the price gateway, the forecast engine and the
statistics services for the presentation layer.
"""

from .forecast_use_cases import (
    ForecastError,
    ForecastTimeoutError,
    ForecastUpstreamError,
    GetDailyForecastUseCase,
    GetSelectableDatesUseCase,
    InvalidForecastDateError,
)
from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase

__all__ = [
    "ForecastError",
    "ForecastTimeoutError",
    "ForecastUpstreamError",
    "InvalidForecastDateError",
    "GetDailyForecastUseCase",
    "GetSelectableDatesUseCase",
    "GetApplicationInfoUseCase",
    "GetHealthStatusUseCase",
]

"""
DTOs Package - Application Layer

Data Transfer Objects exchanged between the application layer and the
presentation layer.
"""

from .forecast_dto import (
    ActualPointDTO,
    ActualsDTO,
    BacktestDTO,
    DailyStatsDTO,
    ForecastDateOptionDTO,
    ForecastPointDTO,
    ForecastResponseDTO,
    ForecastStatsDTO,
    SelectableDatesDTO,
)
from .health_dto import ApplicationInfoDTO, DependencyStatusDTO, SystemHealthDTO

__all__ = [
    "ActualPointDTO",
    "ActualsDTO",
    "BacktestDTO",
    "DailyStatsDTO",
    "ForecastDateOptionDTO",
    "ForecastPointDTO",
    "ForecastResponseDTO",
    "ForecastStatsDTO",
    "SelectableDatesDTO",
    "ApplicationInfoDTO",
    "DependencyStatusDTO",
    "SystemHealthDTO",
]

"""
Application DTOs - Forecast

Response payloads of the forecast endpoints. NaN statistics are exposed as
null so that the documents stay valid JSON.
"""

from __future__ import annotations

import datetime as dt
import math
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from spp_forecast.domain.entities.metrics import BacktestResult, DailyStats
from spp_forecast.domain.entities.time_series import (
    ForecastPoint,
    Observation,
    SlotSource,
)
from spp_forecast.domain.services.seasonal_forecast import slot_index


def _finite_or_none(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value):
        return None
    return value


class ForecastPointDTO(BaseModel):
    """One forecast slot."""

    timestamp: dt.datetime = Field(description="Slot start, market local time")
    value: float = Field(description="Forecast price ($/MWh)")
    source: SlotSource = Field(
        description="observed, carried_forward or zero_fill",
    )

    @classmethod
    def from_domain(cls, point: ForecastPoint) -> "ForecastPointDTO":
        return cls(timestamp=point.timestamp, value=point.value, source=point.source)


class ActualPointDTO(BaseModel):
    """A realized price."""

    timestamp: dt.datetime
    value: float
    interval: int = Field(ge=1, le=96, description="1-based interval of the day")

    @classmethod
    def from_domain(cls, observation: Observation) -> "ActualPointDTO":
        return cls(
            timestamp=observation.timestamp,
            value=observation.value,
            interval=slot_index(observation.timestamp) + 1,
        )


class ActualsDTO(BaseModel):
    date: dt.date
    points: List[ActualPointDTO] = Field(default_factory=list)


class DailyStatsDTO(BaseModel):
    """Min/max/avg/std; every field is null for an empty day."""

    min: Optional[float] = None
    max: Optional[float] = None
    avg: Optional[float] = None
    std: Optional[float] = None

    @classmethod
    def from_domain(cls, stats: DailyStats) -> "DailyStatsDTO":
        if stats.is_empty:
            return cls()
        return cls(
            min=_finite_or_none(stats.min),
            max=_finite_or_none(stats.max),
            avg=_finite_or_none(stats.avg),
            std=_finite_or_none(stats.std),
        )


class ForecastStatsDTO(BaseModel):
    forecast: DailyStatsDTO
    actuals: DailyStatsDTO


class BacktestDTO(BaseModel):
    """Accuracy of the method on the comparison day."""

    date: dt.date = Field(description="Comparison day")
    mae: Optional[float] = Field(description="Mean absolute error ($/MWh)")
    mape: Optional[float] = Field(
        description="Mean absolute percentage error, null when undefined"
    )
    actual_count: int = Field(ge=0, description="Actual points available")
    sample_count: int = Field(ge=0, description="Pairs the metrics were computed on")

    @classmethod
    def from_domain(
        cls, day: dt.date, result: BacktestResult, actual_count: int
    ) -> "BacktestDTO":
        return cls(
            date=day,
            mae=_finite_or_none(result.mae),
            mape=_finite_or_none(result.mape),
            actual_count=actual_count,
            sample_count=result.sample_count,
        )


class ForecastResponseDTO(BaseModel):
    """DTO returned by ``GET /forecast``."""

    settlement_point: str
    date: dt.date
    data_mode: str
    generated_at: dt.datetime
    forecast: List[ForecastPointDTO]
    actuals: ActualsDTO
    stats: ForecastStatsDTO
    backtest: BacktestDTO

    @staticmethod
    def points(points: Sequence[ForecastPoint]) -> List[ForecastPointDTO]:
        return [ForecastPointDTO.from_domain(point) for point in points]

    model_config = {
        "json_schema_extra": {
            "example": {
                "settlement_point": "HB_WEST",
                "date": "2026-02-17",
                "data_mode": "ercot-np6-905",
                "generated_at": "2026-02-17T06:00:00Z",
                "forecast": [
                    {
                        "timestamp": "2026-02-17T00:00:00-06:00",
                        "value": 21.37,
                        "source": "observed",
                    }
                ],
                "actuals": {
                    "date": "2026-02-10",
                    "points": [
                        {
                            "timestamp": "2026-02-10T00:00:00-06:00",
                            "value": -1.39,
                            "interval": 1,
                        }
                    ],
                },
                "stats": {
                    "forecast": {"min": 12.1, "max": 48.9, "avg": 24.3, "std": 7.8},
                    "actuals": {"min": -1.39, "max": 61.2, "avg": 22.5, "std": 9.4},
                },
                "backtest": {
                    "date": "2026-02-10",
                    "mae": 5.12,
                    "mape": 31.7,
                    "actual_count": 96,
                    "sample_count": 96,
                },
            }
        }
    }


class ForecastDateOptionDTO(BaseModel):
    date: dt.date
    weekday: str = Field(description="Short weekday name, e.g. Mon")
    label: str = Field(description="Short month/day label, e.g. Feb 10")


class SelectableDatesDTO(BaseModel):
    """Dates a forecast can be requested for."""

    today: dt.date
    min: dt.date
    max: dt.date
    dates: List[ForecastDateOptionDTO]

from __future__ import annotations

import json
from datetime import date, datetime

from spp_forecast.application.dtos.forecast_dto import (
    ActualPointDTO,
    BacktestDTO,
    DailyStatsDTO,
    ForecastPointDTO,
)
from spp_forecast.domain.entities.metrics import BacktestResult, DailyStats
from spp_forecast.domain.entities.time_series import (
    ForecastPoint,
    Observation,
    SlotSource,
)
from tests.conftest import CHICAGO


def test_empty_daily_stats_serialize_as_null() -> None:
    dto = DailyStatsDTO.from_domain(DailyStats.empty())

    assert json.loads(dto.model_dump_json()) == {
        "min": None,
        "max": None,
        "avg": None,
        "std": None,
    }


def test_daily_stats_dto_keeps_finite_values() -> None:
    dto = DailyStatsDTO.from_domain(DailyStats(min=-1.5, max=9.0, avg=3.0, std=2.0))

    assert dto.min == -1.5
    assert dto.std == 2.0


def test_backtest_dto_maps_nan_mae_to_null() -> None:
    result = BacktestResult(mae=float("nan"), mape=None, sample_count=0)

    dto = BacktestDTO.from_domain(date(2026, 2, 10), result, actual_count=0)

    assert dto.mae is None
    assert dto.mape is None
    assert dto.sample_count == 0


def test_actual_point_interval_is_one_based() -> None:
    observation = Observation(
        timestamp=datetime(2026, 2, 10, 23, 45, tzinfo=CHICAGO), value=3.2
    )

    dto = ActualPointDTO.from_domain(observation)

    assert dto.interval == 96


def test_forecast_point_keeps_local_offset_and_source() -> None:
    point = ForecastPoint(
        timestamp=datetime(2026, 2, 17, 6, 0, tzinfo=CHICAGO),
        value=20.0,
        source=SlotSource.CARRIED_FORWARD,
    )

    payload = json.loads(ForecastPointDTO.from_domain(point).model_dump_json())

    assert payload["timestamp"] == "2026-02-17T06:00:00-06:00"
    assert payload["source"] == "carried_forward"

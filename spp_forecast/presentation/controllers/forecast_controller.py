"""
Presentation Layer - Forecast Controller

Exposes the daily price forecast and the list of selectable forecast dates.
"""

from typing import Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, Response

from spp_forecast.application.dtos.forecast_dto import (
    ForecastResponseDTO,
    SelectableDatesDTO,
)
from spp_forecast.application.use_cases.forecast_use_cases import (
    ForecastTimeoutError,
    ForecastUpstreamError,
    GetDailyForecastUseCase,
    GetSelectableDatesUseCase,
    InvalidForecastDateError,
)
from spp_forecast.main.container import AppContainer

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/forecast", tags=["Forecast"])

CACHE_CONTROL = "public, max-age=60"


@router.get(
    "",
    response_model=ForecastResponseDTO,
    summary="Forecast 15-minute settlement point prices for one day",
    description="""
    Forecast the 96 fifteen-minute prices of the requested day as the per-slot
    mean of the same weekday over the previous weeks. The response also carries
    the actual prices of the same weekday one week earlier, summary statistics
    for both series and the backtest error of the method on that day.
    """,
)
@inject
async def get_forecast(
    response: Response,
    date: Optional[str] = Query(
        default=None,
        description="Delivery day to forecast (YYYY-MM-DD), today to today + 7",
    ),
    forecast_use_case: GetDailyForecastUseCase = Depends(
        Provide[AppContainer.get_daily_forecast_use_case]
    ),
) -> ForecastResponseDTO:
    structlog.contextvars.bind_contextvars(endpoint="forecast", date=date)
    try:
        result = await forecast_use_case.execute(date)
    except InvalidForecastDateError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except ForecastTimeoutError as exc:
        raise HTTPException(status_code=504, detail=str(exc))
    except ForecastUpstreamError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.error("forecast.unexpected_error", error=str(exc), exc_info=exc)
        raise HTTPException(status_code=500, detail="Internal server error")

    response.headers["Cache-Control"] = CACHE_CONTROL
    return result


@router.get(
    "/dates",
    response_model=SelectableDatesDTO,
    summary="List the days a forecast can be requested for",
)
@inject
async def get_forecast_dates(
    dates_use_case: GetSelectableDatesUseCase = Depends(
        Provide[AppContainer.get_selectable_dates_use_case]
    ),
) -> SelectableDatesDTO:
    return dates_use_case.execute()

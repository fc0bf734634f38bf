"""
Application Use Case - Daily forecast

Orchestrates one forecast request:
  * Validation of the requested day against the forecast horizon
  * Retrieval of the same-weekday history from the price gateway
  * Seasonal forecast of the requested day
  * Backtest of the method on the same weekday one week earlier, using only
    history that precedes that day
  * Summary statistics and error metrics for display
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional
from zoneinfo import ZoneInfo

import structlog

from spp_forecast.application.dtos.forecast_dto import (
    ActualPointDTO,
    ActualsDTO,
    BacktestDTO,
    DailyStatsDTO,
    ForecastDateOptionDTO,
    ForecastResponseDTO,
    ForecastStatsDTO,
    SelectableDatesDTO,
)
from spp_forecast.domain.entities.errors import (
    PriceHistoryError,
    PriceHistoryTimeoutError,
)
from spp_forecast.domain.entities.time_series import ForecastPoint, Observation
from spp_forecast.domain.gateways.price_history_gateway import IPriceHistoryGateway
from spp_forecast.domain.ports.cache import ICache
from spp_forecast.domain.services.seasonal_forecast import (
    DEFAULT_WEEKS_LOOKBACK,
    SLOTS_PER_DAY,
    build_seasonal_forecast,
    has_observed_slots,
    slot_index,
)
from spp_forecast.domain.services.statistics import (
    DEFAULT_MAPE_EPSILON,
    backtest,
    daily_stats,
)
from spp_forecast.shared.clock import day_start, market_today, parse_ymd
from spp_forecast.shared.consts import DATA_MODE

logger = structlog.get_logger(__name__)

DEFAULT_HORIZON_DAYS = 7


class ForecastError(Exception):
    """Base exception for forecast failures."""

    pass


class InvalidForecastDateError(ForecastError):
    """Raised when the requested date is missing, malformed or out of range."""

    pass


class ForecastUpstreamError(ForecastError):
    """Raised when price history could not be obtained."""

    pass


class ForecastTimeoutError(ForecastUpstreamError):
    """Raised when the price history source timed out."""

    pass


def previous_same_weekdays(target: date, count: int) -> List[date]:
    """``[target - 7, target - 14, ...]``, ``count`` entries."""
    return [target - timedelta(days=7 * week) for week in range(1, count + 1)]


class GetDailyForecastUseCase:
    """Builds the forecast, actuals, statistics and backtest for one day."""

    def __init__(
        self,
        price_gateway: IPriceHistoryGateway,
        response_cache: Optional[ICache],
        market_timezone: str,
        weeks_lookback: int = DEFAULT_WEEKS_LOOKBACK,
        horizon_days: int = DEFAULT_HORIZON_DAYS,
        mape_epsilon: float = DEFAULT_MAPE_EPSILON,
        now: Optional[Callable[[], datetime]] = None,
    ):
        if weeks_lookback < 1:
            raise ValueError("weeks_lookback must be a positive integer")
        self.price_gateway = price_gateway
        self.response_cache = response_cache
        self.tz = ZoneInfo(market_timezone)
        self.weeks_lookback = weeks_lookback
        self.horizon_days = horizon_days
        self.mape_epsilon = mape_epsilon
        self._now = now or (lambda: datetime.now(self.tz))

    async def execute(self, requested_date: Optional[str]) -> ForecastResponseDTO:
        target = self._validate_date(requested_date)
        settlement_point = self.price_gateway.settlement_point

        logger.info(
            "forecast.request.start",
            settlement_point=settlement_point,
            date=target.isoformat(),
        )

        if self.response_cache is None:
            return await self._build_response(target)

        cache_key = f"forecast:{settlement_point}:{target.isoformat()}"
        return await self.response_cache.get_or_set(
            cache_key, lambda: self._build_response(target)
        )

    def _validate_date(self, requested_date: Optional[str]) -> date:
        if not requested_date:
            raise InvalidForecastDateError("Missing date")

        target = parse_ymd(requested_date)
        if target is None:
            raise InvalidForecastDateError("Invalid date (use YYYY-MM-DD)")

        today = market_today(self.tz, self._now())
        latest = today + timedelta(days=self.horizon_days)
        if target < today or target > latest:
            raise InvalidForecastDateError(
                f"Date must be within the next {self.horizon_days} days"
            )
        return target

    async def _build_response(self, target: date) -> ForecastResponseDTO:
        settlement_point = self.price_gateway.settlement_point
        history_days = previous_same_weekdays(target, self.weeks_lookback)
        compare_day = history_days[0]

        days = await self._fetch_days(history_days)
        history = sorted(
            (obs for day in history_days for obs in days[day]),
            key=lambda obs: obs.timestamp,
        )
        if not history:
            raise ForecastUpstreamError(
                f"No {settlement_point} history returned from ERCOT."
            )
        actuals = days[compare_day]

        target_start = day_start(target, self.tz)
        compare_start = day_start(compare_day, self.tz)

        forecast_points = build_seasonal_forecast(
            target_start, history, self.weeks_lookback
        )

        history_before_compare = [o for o in history if o.timestamp < compare_start]
        compare_forecast = build_seasonal_forecast(
            compare_start, history_before_compare, self.weeks_lookback
        )

        actual_values = [o.value for o in actuals]
        predicted_values = self._align_to_actuals(compare_forecast, actuals)
        result = backtest(actual_values, predicted_values, self.mape_epsilon)

        if len(actuals) < SLOTS_PER_DAY:
            logger.warning(
                "forecast.backtest.partial_actuals",
                compare_day=compare_day.isoformat(),
                actual_count=len(actuals),
            )
        if not has_observed_slots(compare_forecast):
            logger.warning(
                "forecast.backtest.no_history",
                compare_day=compare_day.isoformat(),
            )

        response = ForecastResponseDTO(
            settlement_point=settlement_point,
            date=target,
            data_mode=DATA_MODE,
            generated_at=datetime.now(timezone.utc),
            forecast=ForecastResponseDTO.points(forecast_points),
            actuals=ActualsDTO(
                date=compare_day,
                points=[ActualPointDTO.from_domain(o) for o in actuals],
            ),
            stats=ForecastStatsDTO(
                forecast=DailyStatsDTO.from_domain(
                    daily_stats([p.value for p in forecast_points])
                ),
                actuals=DailyStatsDTO.from_domain(daily_stats(actual_values)),
            ),
            backtest=BacktestDTO.from_domain(compare_day, result, len(actuals)),
        )

        logger.info(
            "forecast.request.completed",
            settlement_point=settlement_point,
            date=target.isoformat(),
            history_points=len(history),
            actual_points=len(actuals),
            mae=result.mae,
            mape=result.mape,
        )
        return response

    async def _fetch_days(self, days: List[date]) -> Dict[date, List[Observation]]:
        try:
            results = await asyncio.gather(
                *(self.price_gateway.fetch_day(day) for day in days)
            )
        except PriceHistoryTimeoutError as exc:
            logger.error("forecast.history.timeout", error=str(exc))
            raise ForecastTimeoutError(str(exc)) from exc
        except PriceHistoryError as exc:
            logger.error("forecast.history.failed", error=str(exc))
            raise ForecastUpstreamError(str(exc)) from exc
        return dict(zip(days, results))

    @staticmethod
    def _align_to_actuals(
        forecast: List[ForecastPoint], actuals: List[Observation]
    ) -> List[float]:
        # Pair each actual with the forecast of its own slot, so a day with
        # missing intervals is not compared against shifted predictions.
        return [forecast[slot_index(o.timestamp)].value for o in actuals]


class GetSelectableDatesUseCase:
    """Lists the days a forecast can be requested for."""

    def __init__(
        self,
        market_timezone: str,
        horizon_days: int = DEFAULT_HORIZON_DAYS,
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.tz = ZoneInfo(market_timezone)
        self.horizon_days = horizon_days
        self._now = now or (lambda: datetime.now(self.tz))

    def execute(self) -> SelectableDatesDTO:
        today = market_today(self.tz, self._now())
        dates = [today + timedelta(days=offset) for offset in range(self.horizon_days + 1)]
        return SelectableDatesDTO(
            today=today,
            min=dates[0],
            max=dates[-1],
            dates=[
                ForecastDateOptionDTO(
                    date=day,
                    weekday=day.strftime("%a"),
                    label=f"{day.strftime('%b')} {day.day}",
                )
                for day in dates
            ],
        )

"""
Infrastructure Gateway - ERCOT settlement point prices

Implements the price history gateway on top of ERCOT's NP6-905-CD report
(15-minute settlement point prices for nodes, zones and hubs).
"""

from __future__ import annotations

from collections import Counter
from datetime import date, timedelta
from typing import List, Optional
from zoneinfo import ZoneInfo

import structlog

from spp_forecast.domain.entities.time_series import Observation
from spp_forecast.domain.gateways.price_history_gateway import IPriceHistoryGateway
from spp_forecast.domain.ports.cache import ICache
from spp_forecast.infrastructure.gateways.ercot_client import ErcotApiClient
from spp_forecast.infrastructure.gateways.ercot_rows import (
    DecodedRow,
    RejectedRow,
    decode_spp_row,
    extract_rows,
)

logger = structlog.get_logger(__name__)

SPP_15MIN_ENDPOINT = "/np6-905-cd/spp_node_zone_hub"


class ErcotPriceGateway(IPriceHistoryGateway):
    """Fetches one delivery day of prices for a single settlement point."""

    def __init__(
        self,
        api_client: ErcotApiClient,
        settlement_point: str,
        market_timezone: str,
        day_cache: Optional[ICache] = None,
        page_size: int = 2000,
    ):
        """
        Initialize the gateway.

        Args:
            api_client: Authenticated ERCOT HTTP client
            settlement_point: Settlement point name, e.g. "HB_WEST"
            market_timezone: IANA zone the delivery dates refer to
            day_cache: Optional cache of decoded days
            page_size: Rows requested per call; one day is 96 rows
        """
        self.api_client = api_client
        self._settlement_point = settlement_point.strip().upper()
        self.tz = ZoneInfo(market_timezone)
        self.day_cache = day_cache
        self.page_size = page_size

    @property
    def settlement_point(self) -> str:
        return self._settlement_point

    def cache_key(self, day: date) -> str:
        return f"rows:{self._settlement_point}:{day.isoformat()}"

    async def fetch_day(self, day: date) -> List[Observation]:
        if self.day_cache is None:
            return await self._fetch_day_uncached(day)
        return await self.day_cache.get_or_set(
            self.cache_key(day), lambda: self._fetch_day_uncached(day)
        )

    async def _fetch_day_uncached(self, day: date) -> List[Observation]:
        # deliveryDateTo is the next day; from == to ranges return nothing.
        query = {
            "settlementPoint": self._settlement_point,
            "deliveryDateFrom": day.isoformat(),
            "deliveryDateTo": (day + timedelta(days=1)).isoformat(),
            "DSTFlag": "false",
            "size": str(self.page_size),
        }
        payload = await self.api_client.get_json(SPP_15MIN_ENDPOINT, query)
        rows = extract_rows(payload)

        decoded: List[DecodedRow] = []
        rejected: Counter = Counter()
        for row in rows:
            result = decode_spp_row(row, self._settlement_point, self.tz)
            if isinstance(result, RejectedRow):
                rejected[result.reason] += 1
                continue
            if result.delivery_date != day:
                rejected["other_day"] += 1
                continue
            decoded.append(result)

        decoded.sort(key=lambda r: r.slot)

        if rejected:
            logger.debug(
                "ercot.rows.rejected",
                day=day.isoformat(),
                rejected=dict(rejected),
            )
        logger.info(
            "ercot.day.fetched",
            settlement_point=self._settlement_point,
            day=day.isoformat(),
            rows=len(rows),
            observations=len(decoded),
        )
        return [r.observation for r in decoded]

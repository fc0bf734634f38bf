"""
Domain Gateway - Price History

Interface of the source that provides realized 15-minute settlement point
prices for a calendar day.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List

from spp_forecast.domain.entities.time_series import Observation


class IPriceHistoryGateway(ABC):
    """Interface for price history providers."""

    @property
    @abstractmethod
    def settlement_point(self) -> str:
        """Settlement point whose prices this gateway returns."""

    @abstractmethod
    async def fetch_day(self, day: date) -> List[Observation]:
        """
        Fetch the realized prices of one delivery day.

        Args:
            day: Delivery date in the market's local calendar.

        Returns:
            Observations of that day ordered by slot; may be partial or empty
            when the market has not published the whole day yet.

        Raises:
            PriceHistoryError: When the upstream source fails.
            PriceHistoryTimeoutError: When the upstream source times out.
        """
        pass

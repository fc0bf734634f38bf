"""
Dashboard - forecast API client

Synchronous reads of ``/forecast`` and ``/forecast/dates`` for the Streamlit
script, which runs top to bottom on every interaction.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx
import structlog

logger = structlog.get_logger(__name__)


class DashboardApiError(Exception):
    """The forecast API could not be read; ``message`` is shown to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ForecastApiClient:
    def __init__(self, base_url: str, timeout: float = 15.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def selectable_dates(self) -> Dict[str, Any]:
        return self._get("/forecast/dates")

    def forecast(self, day: str) -> Dict[str, Any]:
        return self._get("/forecast", params={"date": day})

    def _get(
        self, path: str, params: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            with httpx.Client(timeout=self.timeout) as client:
                response = client.get(url, params=params)
        except httpx.TimeoutException as exc:
            logger.warning("dashboard.api.timeout", url=url)
            raise DashboardApiError("Request timed out") from exc
        except httpx.RequestError as exc:
            logger.warning("dashboard.api.unreachable", url=url, error=str(exc))
            raise DashboardApiError(f"Forecast API unreachable: {exc}") from exc

        if response.status_code >= 400:
            raise DashboardApiError(
                _error_detail(response), status_code=response.status_code
            )
        return response.json()


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    detail = payload.get("detail") if isinstance(payload, dict) else None
    return str(detail) if detail else f"Request failed (HTTP {response.status_code})"

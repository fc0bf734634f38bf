"""
Infrastructure Gateway - ERCOT public reports HTTP client

Authenticated JSON GETs against ``https://api.ercot.com/api/public-reports``
with a bounded retry on throttling, gateway errors and timeouts.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx
import structlog

from spp_forecast.infrastructure.gateways.ercot_auth import ErcotTokenProvider
from spp_forecast.infrastructure.gateways.ercot_errors import (
    ErcotAuthenticationError,
    ErcotConfigurationError,
    ErcotTimeoutError,
    ErcotUpstreamError,
    redact,
)

logger = structlog.get_logger(__name__)

DEFAULT_API_BASE_URL = "https://api.ercot.com/api/public-reports"
RETRYABLE_STATUS_CODES = frozenset({429, 502, 503, 504})


def is_retryable_status(status_code: int) -> bool:
    return status_code in RETRYABLE_STATUS_CODES


class ErcotApiClient:
    """HTTP client for ERCOT public report endpoints."""

    def __init__(
        self,
        token_provider: ErcotTokenProvider,
        subscription_key: Optional[str],
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 15.0,
        max_attempts: int = 2,
        backoff_seconds: float = 0.3,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize the ERCOT API client.

        Args:
            token_provider: Supplies the bearer id_token
            subscription_key: ``Ocp-Apim-Subscription-Key`` of the API product
            base_url: Base URL of the public reports API
            timeout: Request timeout in seconds
            max_attempts: Total attempts for retryable failures
            backoff_seconds: Delay unit; attempt ``n`` waits ``n * backoff_seconds``
            sleep: Awaitable sleep, overridable in tests
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.token_provider = token_provider
        self.subscription_key = subscription_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self._sleep = sleep

    async def get_json(self, path: str, query: Dict[str, str]) -> Any:
        """
        GET ``path`` with ``query`` and return the decoded JSON body.

        Raises:
            ErcotConfigurationError: Subscription key or credentials missing
            ErcotAuthenticationError: Token refused, or request unauthorized
            ErcotUpstreamError: Non-retryable or exhausted HTTP failure
            ErcotTimeoutError: Every attempt timed out
        """
        if not self.subscription_key:
            raise ErcotConfigurationError("Missing ERCOT_SUBSCRIPTION_KEY")

        token = await self.token_provider.get_token()
        url = f"{self.base_url}{path}"
        headers = {
            "Authorization": f"Bearer {token}",
            "Ocp-Apim-Subscription-Key": self.subscription_key,
            "Accept": "application/json",
        }

        for attempt in range(1, self.max_attempts + 1):
            logger.debug("ercot.request", path=path, params=query, attempt=attempt)
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, params=query, headers=headers)
            except httpx.TimeoutException as e:
                if attempt < self.max_attempts:
                    await self._backoff(path, attempt, reason="timeout")
                    continue
                logger.error("ercot.request.timeout", path=path, attempts=attempt)
                raise ErcotTimeoutError(
                    f"ERCOT API request timed out ({path})",
                    details={"path": path, "attempts": attempt},
                ) from e
            except httpx.RequestError as e:
                logger.error("ercot.request.error", path=path, error=str(e))
                raise ErcotUpstreamError(f"ERCOT API request failed: {e}") from e

            if response.status_code >= 400:
                if is_retryable_status(response.status_code) and (
                    attempt < self.max_attempts
                ):
                    await self._backoff(
                        path, attempt, reason=f"status {response.status_code}"
                    )
                    continue

                body = redact(response.text)
                logger.error(
                    "ercot.request.failed",
                    path=path,
                    status_code=response.status_code,
                    response_text=body,
                )
                if response.status_code in (401, 403):
                    self.token_provider.invalidate()
                    raise ErcotAuthenticationError(
                        f"ERCOT API rejected credentials: {response.status_code}",
                        details={"status_code": response.status_code},
                    )
                raise ErcotUpstreamError(
                    f"ERCOT API failed: {response.status_code} {body}",
                    status_code=response.status_code,
                )

            try:
                return response.json()
            except ValueError as e:
                raise ErcotUpstreamError(
                    f"ERCOT API returned invalid JSON ({path})",
                    status_code=response.status_code,
                ) from e

        raise ErcotUpstreamError(f"ERCOT API failed after retries ({path})")

    async def _backoff(self, path: str, attempt: int, reason: str) -> None:
        delay = self.backoff_seconds * attempt
        logger.warning(
            "ercot.request.retry",
            path=path,
            attempt=attempt,
            reason=reason,
            delay_seconds=delay,
        )
        await self._sleep(delay)

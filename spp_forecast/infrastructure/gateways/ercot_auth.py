"""
Infrastructure Gateway - ERCOT authentication

ERCOT's public reports API requires an ``id_token`` issued by its Azure B2C
tenant through the resource-owner-password flow. Tokens are kept in an
injected ``TokenCache`` and refreshed shortly before they expire.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx
import structlog

from spp_forecast.infrastructure.gateways.ercot_errors import (
    ErcotAuthenticationError,
    ErcotConfigurationError,
    ErcotTimeoutError,
    ErcotUpstreamError,
    redact,
)

logger = structlog.get_logger(__name__)

DEFAULT_TOKEN_URL = (
    "https://ercotb2c.b2clogin.com/ercotb2c.onmicrosoft.com/"
    "B2C_1_PUBAPI-ROPC-FLOW/oauth2/v2.0/token"
)
DEFAULT_CLIENT_ID = "fec253ea-0d06-4272-a5e6-b478baeecd70"
DEFAULT_EXPIRES_IN_SECONDS = 3600


@dataclass
class TokenCache:
    """Holds the current id_token and its expiry (epoch seconds)."""

    token: Optional[str] = None
    expires_at: float = 0.0

    def is_valid(self, now: float, skew_seconds: float) -> bool:
        return self.token is not None and now < self.expires_at - skew_seconds

    def store(self, token: str, expires_in: float, now: float) -> None:
        self.token = token
        self.expires_at = now + expires_in

    def clear(self) -> None:
        self.token = None
        self.expires_at = 0.0


class ErcotTokenProvider:
    """Obtains and caches ERCOT id_tokens."""

    def __init__(
        self,
        username: Optional[str],
        password: Optional[str],
        token_cache: TokenCache,
        client_id: str = DEFAULT_CLIENT_ID,
        token_url: str = DEFAULT_TOKEN_URL,
        timeout: float = 12.0,
        refresh_skew_seconds: float = 30.0,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the token provider.

        Args:
            username: ERCOT API portal user name
            password: ERCOT API portal password
            token_cache: Shared cache holding the current token
            client_id: Azure B2C client id of the public API
            token_url: Azure B2C token endpoint
            timeout: Token request timeout in seconds
            refresh_skew_seconds: Refresh this long before the token expires
            clock: Time source, overridable in tests
        """
        self.username = username
        self.password = password
        self.client_id = client_id
        self.token_url = token_url
        self.timeout = timeout
        self.refresh_skew_seconds = refresh_skew_seconds
        self._cache = token_cache
        self._clock = clock
        self._lock = asyncio.Lock()

    @property
    def is_configured(self) -> bool:
        return bool(self.username and self.password)

    def invalidate(self) -> None:
        self._cache.clear()

    async def get_token(self) -> str:
        """Return a valid id_token, requesting a new one when needed."""
        if self._cache.is_valid(self._clock(), self.refresh_skew_seconds):
            return self._cache.token  # type: ignore[return-value]

        # Concurrent day fetches share one refresh.
        async with self._lock:
            if self._cache.is_valid(self._clock(), self.refresh_skew_seconds):
                return self._cache.token  # type: ignore[return-value]
            return await self._request_token()

    async def _request_token(self) -> str:
        if not self.is_configured:
            raise ErcotConfigurationError("Missing ERCOT_USERNAME / ERCOT_PASSWORD")

        form = {
            "grant_type": "password",
            "username": self.username,
            "password": self.password,
            "scope": f"openid {self.client_id} offline_access",
            "client_id": self.client_id,
            "response_type": "id_token",
        }

        logger.info("ercot.token.request", token_url=self.token_url)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.token_url,
                    data=form,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
        except httpx.TimeoutException as e:
            logger.error("ercot.token.timeout", timeout=self.timeout)
            raise ErcotTimeoutError("ERCOT token request timed out") from e
        except httpx.RequestError as e:
            logger.error("ercot.token.request_error", error=str(e))
            raise ErcotUpstreamError(f"ERCOT token request failed: {e}") from e

        if response.status_code >= 400:
            body = redact(response.text)
            logger.error(
                "ercot.token.rejected",
                status_code=response.status_code,
                response_text=body,
            )
            raise ErcotAuthenticationError(
                f"ERCOT token failed: {response.status_code} {body}",
                details={"status_code": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ErcotAuthenticationError(
                "ERCOT token response is not valid JSON"
            ) from e

        token = payload.get("id_token") if isinstance(payload, dict) else None
        if not token:
            raise ErcotAuthenticationError("ERCOT token response missing id_token")

        expires_in = payload.get("expires_in") or DEFAULT_EXPIRES_IN_SECONDS
        try:
            expires_in = float(expires_in)
        except (TypeError, ValueError):
            expires_in = float(DEFAULT_EXPIRES_IN_SECONDS)

        self._cache.store(token, expires_in, self._clock())
        logger.info("ercot.token.refreshed", expires_in=expires_in)
        return token

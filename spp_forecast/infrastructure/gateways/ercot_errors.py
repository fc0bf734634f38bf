"""Errors raised by the ERCOT public API integration."""

from typing import Any, Dict, Optional

from spp_forecast.domain.entities.errors import (
    PriceHistoryError,
    PriceHistoryTimeoutError,
)

MAX_ERROR_BODY_CHARS = 800


def redact(text: str, max_len: int = MAX_ERROR_BODY_CHARS) -> str:
    """Shorten an upstream response body before it ends up in errors or logs."""
    return f"{text[:max_len]}…" if len(text) > max_len else text


class ErcotError(PriceHistoryError):
    """Base exception for ERCOT API failures."""

    pass


class ErcotConfigurationError(ErcotError):
    """Raised when credentials or keys needed to call ERCOT are missing."""

    pass


class ErcotAuthenticationError(ErcotError):
    """Raised when the identity provider refuses to issue a token."""

    pass


class ErcotUpstreamError(ErcotError):
    """Raised when the ERCOT API answers with an error or unusable payload."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.status_code = status_code
        super().__init__(message, details)


class ErcotTimeoutError(ErcotError, PriceHistoryTimeoutError):
    """Raised when ERCOT did not answer within the configured timeout."""

    pass

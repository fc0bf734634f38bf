"""
Gateways Package - Infrastructure Layer

ERCOT public API implementations of the domain gateway interfaces.
"""

from .ercot_auth import ErcotTokenProvider, TokenCache
from .ercot_client import ErcotApiClient
from .ercot_errors import (
    ErcotAuthenticationError,
    ErcotConfigurationError,
    ErcotError,
    ErcotTimeoutError,
    ErcotUpstreamError,
)
from .ercot_price_gateway import ErcotPriceGateway

__all__ = [
    "ErcotApiClient",
    "ErcotAuthenticationError",
    "ErcotConfigurationError",
    "ErcotError",
    "ErcotPriceGateway",
    "ErcotTimeoutError",
    "ErcotTokenProvider",
    "ErcotUpstreamError",
    "TokenCache",
]

"""
Shared module - Cross-cutting concerns / Shared Layer

Constants, enums, logging and environment helpers used by every other layer.
It must not depend on the infrastructure or on web frameworks.
"""

from .clock import market_today, parse_ymd
from .consts import (
    DATA_MODE,
    DEFAULT_MARKET_TIMEZONE,
    DEFAULT_SETTLEMENT_POINT,
    EnumEnvironment,
    EnumLogLevel,
)
from .logging import (
    bind_request_context,
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

__all__ = [
    "DATA_MODE",
    "DEFAULT_MARKET_TIMEZONE",
    "DEFAULT_SETTLEMENT_POINT",
    "EnumEnvironment",
    "EnumLogLevel",
    "bind_request_context",
    "configure_logging",
    "get_logger",
    "market_today",
    "parse_ymd",
    "update_logging_from_settings",
]

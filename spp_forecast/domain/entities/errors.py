"""
Domain Errors

Base error type shared by every layer that needs to carry structured details
alongside a message.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class PriceHistoryError(DomainError):
    """Raised by price history gateways when history cannot be retrieved."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class PriceHistoryTimeoutError(PriceHistoryError):
    """Raised when the price history source did not answer in time."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)

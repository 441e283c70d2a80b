"""
Domain exceptions for the Power Price Check service.
Provides clear, typed exceptions for business logic errors.
"""

from enum import Enum


class PriceAPIException(Exception):
    """Base exception for all Power Price Check errors."""
    pass


class ConfigError(PriceAPIException):
    """Raised when the service is misconfigured (e.g. missing API token)."""
    pass


class UnsupportedResolutionError(ConfigError):
    """Raised in strict mode when a series declares an unknown resolution."""

    def __init__(self, resolution: str):
        self.resolution = resolution
        super().__init__(f"Unsupported series resolution: {resolution!r}")


class FetchErrorKind(str, Enum):
    """Failure classes of the market data fetch."""
    UNAUTHORIZED = "unauthorized"
    BAD_REQUEST = "bad_request"
    UNREACHABLE = "unreachable"
    UPSTREAM = "upstream"


class FetchError(PriceAPIException):
    """Raised when external data fetching fails."""

    def __init__(self, message: str, kind: FetchErrorKind = FetchErrorKind.UPSTREAM):
        self.kind = kind
        super().__init__(message)


class DataError(PriceAPIException):
    """Raised when the upstream payload is malformed."""
    pass


class InsufficientDataError(PriceAPIException):
    """Raised when there are not enough hourly prices for the requested window."""
    pass


class NoCurrentDataError(PriceAPIException):
    """Raised when no price exists for the current hour."""
    pass


class InvalidParameterError(PriceAPIException):
    """Raised when a duration or look-ahead value is out of range."""
    pass

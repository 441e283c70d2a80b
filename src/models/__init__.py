"""
Data models package for the Power Price Check service.
Contains Pydantic models for price data and API responses.
"""

from .price import (
    PRICE_UNIT,
    CacheEntry,
    HealthResponse,
    HourlyPrice,
    PriceOverviewResponse,
    PricePoint,
    PriceSummary,
    RawPricePoint,
    Recommendation,
    TimeSeriesPeriod,
)

__all__ = [
    "PRICE_UNIT",
    "CacheEntry",
    "HealthResponse",
    "HourlyPrice",
    "PriceOverviewResponse",
    "PricePoint",
    "PriceSummary",
    "RawPricePoint",
    "Recommendation",
    "TimeSeriesPeriod",
]

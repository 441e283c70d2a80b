"""
Pydantic data models for price data and API responses.
Defines the raw upstream series, the normalized hourly series and the
recommendation returned to callers.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

PRICE_UNIT = "€cents/kWh"


class RawPricePoint(BaseModel):
    """
    One <Point> of an ENTSO-E period, as published.

    Example:
        <Point><position>1</position><price.amount>84.34</price.amount></Point>
    """
    model_config = ConfigDict(frozen=True)

    position: int = Field(ge=1, description="1-based position within the period")
    price_amount: Decimal = Field(description="Price in EUR/MWh - can be negative")


class TimeSeriesPeriod(BaseModel):
    """A single <Period> block: start reference, resolution and its points."""
    model_config = ConfigDict(frozen=True)

    period_start: datetime = Field(description="Start of the period's time interval (UTC)")
    resolution: Optional[str] = Field(
        default=None,
        description="ISO-8601 duration of each point, e.g. 'PT15M' or 'PT60M'"
    )
    points: List[RawPricePoint] = Field(default_factory=list)


class PricePoint(BaseModel):
    """A raw point placed on the time axis and converted to €cents/kWh."""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    price: Decimal
    resolution_minutes: int


class HourlyPrice(BaseModel):
    """
    Average price for one UTC clock hour.
    """
    model_config = ConfigDict(frozen=True)

    hour_start: datetime = Field(description="Start of the hour (UTC, minutes/seconds zeroed)")
    price: Decimal = Field(description="Mean price of the hour, rounded to 2 places (€cents/kWh)")
    unit: str = Field(default=PRICE_UNIT)


class CacheEntry(BaseModel):
    """Normalized series together with the time it was fetched."""
    model_config = ConfigDict(frozen=True)

    fetched_at: datetime
    ttl_seconds: int
    series: Tuple[HourlyPrice, ...]
    source: Optional[str] = Field(default=None, description="Name of the price source that produced the series")


class Recommendation(BaseModel):
    """
    Cheapest contiguous window for running an appliance, compared with now.
    """
    model_config = ConfigDict(frozen=True)

    window_start: datetime = Field(description="Start of the first hour in the window")
    window_end: datetime = Field(description="window_start + duration_hours")
    duration_hours: int
    average_price: Decimal = Field(description="Mean hourly price of the window")
    current_price: Decimal = Field(description="Price of the current hour")
    savings: Decimal = Field(description="current_price - average_price; negative when now is cheaper")
    savings_percentage: Decimal = Field(description="savings relative to current_price, in percent")
    message: str
    prices: List[HourlyPrice] = Field(default_factory=list, description="Hourly prices inside the window")
    unit: str = Field(default=PRICE_UNIT)


class PriceSummary(BaseModel):
    """Descriptive statistics over a block of hourly prices."""
    count: int
    minimum: Optional[Decimal] = None
    maximum: Optional[Decimal] = None
    average: Optional[Decimal] = None
    median: Optional[Decimal] = None
    unit: str = Field(default=PRICE_UNIT)


class PriceOverviewResponse(BaseModel):
    """Summary of the past and the future price blocks around now."""
    past: PriceSummary
    future: PriceSummary
    current: Optional[HourlyPrice] = None


class HealthResponse(BaseModel):
    """
    Health check response model.
    """
    status: str = Field(description="Health status")
    timestamp: datetime = Field(description="Health check timestamp")
    details: Optional[dict] = Field(default=None, description="Additional health details")

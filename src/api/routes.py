"""
FastAPI route handlers for the main API endpoints.
Exposes current, past and future prices and the best-time recommendation.
"""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, HTTPException, Query

from src.exceptions import (
    DataError,
    FetchError,
    InsufficientDataError,
    InvalidParameterError,
    NoCurrentDataError,
    PriceAPIException,
)
from src.logging_config import get_logger
from src.models.price import HealthResponse, HourlyPrice, PriceOverviewResponse, Recommendation
from src.services.price_service import price_service

logger = get_logger(__name__)

router = APIRouter()


def _to_http_error(e: Exception, **context) -> HTTPException:
    """Translate service exceptions into HTTP errors."""
    if isinstance(e, InvalidParameterError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, (NoCurrentDataError, InsufficientDataError)):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, (FetchError, DataError)):
        logger.error("Upstream price data unavailable", error=str(e), **context)
        return HTTPException(status_code=502, detail="Upstream price data unavailable")
    if isinstance(e, PriceAPIException):
        logger.error("Price API error", error=str(e), **context)
    else:
        logger.error("Unexpected error", error=str(e), **context)
    return HTTPException(status_code=500, detail="Internal server error")


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint for monitoring and load balancers.
    Reports the price cache freshness so stale or missing data is visible.
    """
    try:
        cache = price_service.cache_status()
        if not cache["cached"]:
            data_status = "empty"
        elif cache["expired"]:
            data_status = "stale"
        else:
            data_status = "fresh"

        details = {
            "service": "power-price-check",
            "data_status": data_status,
            "cache": cache,
        }

        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc),
            details=details
        )

    except Exception as e:
        logger.error("Health check failed", error=str(e))
        return HealthResponse(
            status="unhealthy",
            timestamp=datetime.now(timezone.utc),
            details={"service": "power-price-check", "error": str(e)}
        )


@router.get("/prices/current", response_model=HourlyPrice)
async def get_current_price():
    """
    Price of the current hour in €cents/kWh.

    Raises:
        HTTPException: 404 if the current hour has no price, 502 if upstream fails.
    """
    try:
        return await price_service.get_current_price()
    except Exception as e:
        raise _to_http_error(e)


@router.get("/prices/past", response_model=List[HourlyPrice])
async def get_past_prices(
    hours: int = Query(
        default=24,
        description="Number of hours to look back",
        ge=1,
        le=48
    )
):
    """Hourly prices for the most recent hours before the current hour."""
    try:
        return await price_service.get_past_prices(hours)
    except Exception as e:
        raise _to_http_error(e, hours=hours)


@router.get("/prices/future", response_model=List[HourlyPrice])
async def get_future_prices(
    hours: int = Query(
        default=24,
        description="Number of hours to look ahead",
        ge=1,
        le=48
    )
):
    """Hourly prices for the hours following the current hour."""
    try:
        return await price_service.get_future_prices(hours)
    except Exception as e:
        raise _to_http_error(e, hours=hours)


@router.get("/prices/summary", response_model=PriceOverviewResponse)
async def get_price_summary(
    hours: int = Query(
        default=24,
        description="Size of the past and future blocks in hours",
        ge=1,
        le=48
    )
):
    """Min, max, average and median of the past and future price blocks."""
    try:
        return await price_service.get_price_overview(hours)
    except Exception as e:
        raise _to_http_error(e, hours=hours)


@router.get("/recommendation", response_model=Recommendation)
async def recommend_best_time(
    duration: int = Query(
        default=1,
        description="How long the appliance will run, in hours",
        ge=1,
        le=168
    ),
    look_ahead_hours: int = Query(
        default=24,
        description="How many hours ahead to search",
        ge=1,
        le=168  # Max 1 week ahead
    )
):
    """
    Find the cheapest consecutive window of `duration` hours and compare it with now.

    Returns:
        Recommendation with window start/end, average price and savings.

    Raises:
        HTTPException: 400 for invalid parameters, 404 if no window or current price
        is available, 502 if upstream fails.
    """
    try:
        return await price_service.recommend_best_time(duration, look_ahead_hours)
    except Exception as e:
        raise _to_http_error(e, duration=duration, look_ahead_hours=look_ahead_hours)

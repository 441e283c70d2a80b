"""
Resolution normalizer - turns raw ENTSO-E periods into one price per hour.
Supports 15, 30 and 60 minute series; sub-hourly points are averaged per hour.
"""

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Optional

from src.exceptions import UnsupportedResolutionError
from src.logging_config import get_logger
from src.models.price import HourlyPrice, PricePoint, TimeSeriesPeriod
from src.utils.time_utils import ensure_utc, truncate_to_hour

logger = get_logger(__name__)

DEFAULT_RESOLUTION_MINUTES = 60

RESOLUTION_MINUTES = {
    "PT15M": 15,
    "PT30M": 30,
    "PT60M": 60,
    "PT1H": 60,
}

# EUR/MWh -> €cents/kWh
MWH_TO_KWH_CENTS = Decimal("10")

PRICE_QUANTUM = Decimal("0.01")


def round_price(value: Decimal) -> Decimal:
    """Round a price to 2 decimal places, half away from zero."""
    return value.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


def resolve_resolution(resolution: Optional[str], strict: bool = False) -> int:
    """
    Map an ISO-8601 resolution to minutes.

    Args:
        resolution: Declared resolution, e.g. "PT15M"
        strict: Raise instead of falling back to hourly treatment

    Returns:
        Resolution in minutes (15, 30 or 60)

    Raises:
        UnsupportedResolutionError: In strict mode, for unknown or missing values
    """
    key = (resolution or "").strip().upper()
    if key in RESOLUTION_MINUTES:
        return RESOLUTION_MINUTES[key]

    if strict:
        raise UnsupportedResolutionError(resolution or "")

    logger.warning(
        "Unsupported series resolution, treating as hourly",
        observed_resolution=resolution,
        fallback_minutes=DEFAULT_RESOLUTION_MINUTES,
    )
    return DEFAULT_RESOLUTION_MINUTES


def expand_period(period: TimeSeriesPeriod, strict: bool = False) -> List[PricePoint]:
    """Place each point of a period on the time axis and convert it to €cents/kWh."""
    minutes = resolve_resolution(period.resolution, strict)
    start = ensure_utc(period.period_start)
    step = timedelta(minutes=minutes)

    return [
        PricePoint(
            timestamp=start + step * (point.position - 1),
            price=point.price_amount / MWH_TO_KWH_CENTS,
            resolution_minutes=minutes,
        )
        for point in period.points
    ]


def aggregate_hourly(points: Iterable[PricePoint]) -> List[HourlyPrice]:
    """
    Group points by their UTC hour and average each group.

    Hours without any contributing point are left out.
    """
    buckets: Dict[datetime, List[Decimal]] = {}
    for point in points:
        buckets.setdefault(truncate_to_hour(point.timestamp), []).append(point.price)

    return [
        HourlyPrice(hour_start=hour, price=round_price(sum(prices) / len(prices)))
        for hour, prices in sorted(buckets.items())
    ]


def normalize_periods(periods: Iterable[TimeSeriesPeriod], strict: bool = False) -> List[HourlyPrice]:
    """Normalize all periods of a market document into an ascending hourly series."""
    points: List[PricePoint] = []
    for period in periods:
        points.extend(expand_period(period, strict))

    series = aggregate_hourly(points)
    logger.debug("Normalized price series", raw_points=len(points), hours=len(series))
    return series

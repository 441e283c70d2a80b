"""
Recommendation engine - finds the cheapest contiguous window of whole hours
within a look-ahead horizon and compares it with the current hour's price.
"""

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence, Tuple

from src.exceptions import InsufficientDataError, InvalidParameterError, NoCurrentDataError
from src.logging_config import get_logger
from src.models.price import PRICE_UNIT, HourlyPrice, Recommendation
from src.services.normalizer import round_price
from src.utils.time_utils import format_local_time, truncate_to_hour

logger = get_logger(__name__)

MIN_LOOK_AHEAD_HOURS = 1
MAX_LOOK_AHEAD_HOURS = 168  # Max 1 week ahead

PERCENT_QUANTUM = Decimal("0.1")


def validate_parameters(duration_hours: int, look_ahead_hours: int) -> None:
    """
    Reject out-of-range parameters before any data is fetched.

    Raises:
        InvalidParameterError: If duration < 1 or look-ahead is outside 1-168 hours
    """
    if duration_hours < 1:
        raise InvalidParameterError("Duration must be at least 1 hour")
    if not MIN_LOOK_AHEAD_HOURS <= look_ahead_hours <= MAX_LOOK_AHEAD_HOURS:
        raise InvalidParameterError(
            f"Look-ahead must be between {MIN_LOOK_AHEAD_HOURS} and {MAX_LOOK_AHEAD_HOURS} hours"
        )


def select_horizon(series: Sequence[HourlyPrice], now: datetime, look_ahead_hours: int) -> List[HourlyPrice]:
    """Hourly prices from the current hour through current hour + look-ahead, inclusive."""
    current_hour = truncate_to_hour(now)
    horizon_end = current_hour + timedelta(hours=look_ahead_hours)
    return [p for p in series if current_hour <= p.hour_start <= horizon_end]


def find_cheapest_window(prices: Sequence[HourlyPrice], duration_hours: int) -> Tuple[List[HourlyPrice], Decimal]:
    """
    Find the contiguous run of `duration_hours` hours with the lowest mean price.

    Args:
        prices: Hourly prices ordered by hour_start
        duration_hours: Window length in hours

    Returns:
        Tuple of (window prices, unrounded mean price). Ties keep the earliest window.

    Raises:
        InsufficientDataError: If fewer prices than hours requested, or no gap-free window exists
    """
    if len(prices) < duration_hours:
        raise InsufficientDataError(
            f"Not enough data for a {duration_hours}-hour window: {len(prices)} hourly prices available"
        )

    span = timedelta(hours=duration_hours - 1)
    best_window: Optional[List[HourlyPrice]] = None
    best_average: Optional[Decimal] = None

    for i in range(len(prices) - duration_hours + 1):
        window = list(prices[i:i + duration_hours])
        # A missing hour inside the run makes it longer than the duration
        if window[-1].hour_start - window[0].hour_start != span:
            continue

        average = sum(p.price for p in window) / duration_hours
        if best_average is None or average < best_average:
            best_window, best_average = window, average

    if best_window is None:
        raise InsufficientDataError(f"No gap-free {duration_hours}-hour window in the available data")

    return best_window, best_average


def find_current_price(series: Sequence[HourlyPrice], now: datetime) -> HourlyPrice:
    """
    Locate the price of the hour containing `now`.

    Raises:
        NoCurrentDataError: If the series has no entry for the current hour
    """
    current_hour = truncate_to_hour(now)
    for price in series:
        if price.hour_start == current_hour:
            return price
    raise NoCurrentDataError(f"No price available for the current hour {current_hour.isoformat()}")


def calculate_savings(current_price: Decimal, average_price: Decimal) -> Tuple[Decimal, Decimal]:
    """
    Savings of the window relative to now, in €cents/kWh and percent.

    Returns:
        Tuple of (savings rounded to 2 places, percentage rounded to 1 place).
        The percentage is 0 when the current price is not positive.
    """
    savings = round_price(current_price - average_price)
    if current_price > 0:
        percentage = (savings / current_price * 100).quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP)
    else:
        percentage = Decimal("0.0")
    return savings, percentage


def build_message(start: str, end: str, average_price: Decimal, savings: Decimal, percentage: Decimal) -> str:
    """Human readable recommendation text; wording depends on the sign of the savings."""
    base = (
        f"The best time to run your appliance is between {start} and {end}. "
        f"The average price during this period is {average_price} {PRICE_UNIT}."
    )
    if savings > 0:
        return f"{base} Potential savings: {savings} {PRICE_UNIT} ({percentage}%)."
    if savings < 0:
        return f"{base} Note: this is {abs(savings)} {PRICE_UNIT} more expensive than now."
    return f"{base} This is equal to the current price."


def recommend(
    series: Sequence[HourlyPrice],
    duration_hours: int,
    look_ahead_hours: int,
    now: datetime,
    display_timezone: str = "UTC",
) -> Recommendation:
    """
    Recommend the cheapest window of `duration_hours` within the look-ahead horizon.

    Raises:
        InvalidParameterError: For out-of-range parameters
        InsufficientDataError: If no complete window fits in the horizon
        NoCurrentDataError: If the current hour has no price
    """
    validate_parameters(duration_hours, look_ahead_hours)

    current = find_current_price(series, now)
    horizon = select_horizon(series, now, look_ahead_hours)
    window, average = find_cheapest_window(horizon, duration_hours)

    window_start = window[0].hour_start
    window_end = window_start + timedelta(hours=duration_hours)
    average_price = round_price(average)
    savings, percentage = calculate_savings(current.price, average)

    message = build_message(
        format_local_time(window_start, display_timezone),
        format_local_time(window_end, display_timezone),
        average_price,
        savings,
        percentage,
    )

    logger.debug(
        "Computed recommendation",
        window_start=window_start.isoformat(),
        window_end=window_end.isoformat(),
        average_price=str(average_price),
        current_price=str(current.price),
        savings=str(savings),
    )

    return Recommendation(
        window_start=window_start,
        window_end=window_end,
        duration_hours=duration_hours,
        average_price=average_price,
        current_price=current.price,
        savings=savings,
        savings_percentage=percentage,
        message=message,
        prices=window,
    )

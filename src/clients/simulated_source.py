"""
Simulated day-ahead prices for running without an ENTSO-E token.

Produces the same raw period structure as the ENTSO-E client so simulated data
flows through the normal normalizer. Prices are deterministic per hour.
"""

from datetime import datetime, timedelta
from decimal import Decimal
import random
from typing import List, Optional

import pytz

from src.config import settings
from src.logging_config import get_logger
from src.models.price import RawPricePoint, TimeSeriesPeriod
from src.utils.time_utils import truncate_to_hour

logger = get_logger(__name__)

# EUR/MWh
OFF_PEAK_BASE = 80.0
MID_PEAK_BASE = 120.0
PEAK_BASE = 180.0
JITTER = 20.0


class SimulatedPriceSource:
    """Price source that generates a typical daily price curve."""

    def __init__(self, seed: int = 42, timezone_name: Optional[str] = None):
        self.seed = seed
        self.timezone = pytz.timezone(timezone_name or settings.display_timezone)

    @property
    def name(self) -> str:
        return "simulated"

    async def fetch_day_ahead_prices(self, start: datetime, end: datetime) -> List[TimeSeriesPeriod]:
        """Return one hourly period covering [start, end)."""
        period_start = truncate_to_hour(start)
        points = []
        hour = period_start
        position = 1
        while hour < end:
            points.append(RawPricePoint(position=position, price_amount=self._price_for(hour)))
            hour += timedelta(hours=1)
            position += 1

        logger.info("Generated simulated prices", hours=len(points), period_start=period_start.isoformat())
        return [TimeSeriesPeriod(period_start=period_start, resolution="PT60M", points=points)]

    def _price_for(self, hour_start: datetime) -> Decimal:
        """
        Price of one hour in EUR/MWh.

        Off-peak (22-06 local) is cheapest, 09-11 and 17-21 are peak hours.
        """
        local_hour = hour_start.astimezone(self.timezone).hour
        if local_hour >= 22 or local_hour <= 6:
            base = OFF_PEAK_BASE
        elif 9 <= local_hour <= 11 or 17 <= local_hour <= 21:
            base = PEAK_BASE
        else:
            base = MID_PEAK_BASE

        rng = random.Random(f"{self.seed}-{hour_start.isoformat()}")
        return Decimal(str(round(base + rng.random() * JITTER, 2)))

"""
Unified price service - handles data fetching, caching and recommendations.
Owns the price cache and guards refreshes so concurrent callers share one fetch.
"""

import asyncio
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional, Sequence, Tuple, Union

import pandas as pd

from src.clients.entsoe_client import EntsoeClient
from src.clients.simulated_source import SimulatedPriceSource
from src.config import settings
from src.exceptions import ConfigError, FetchError, InvalidParameterError, NoCurrentDataError
from src.logging_config import get_logger
from src.models.price import HourlyPrice, PriceOverviewResponse, PriceSummary, Recommendation
from src.services.normalizer import normalize_periods, round_price
from src.services.price_cache import PriceCache
from src.services.recommendation import find_current_price, recommend, validate_parameters
from src.utils.time_utils import fetch_window, truncate_to_hour, utc_now

logger = get_logger(__name__)

PriceSource = Union[EntsoeClient, SimulatedPriceSource]


def _to_price(value: float) -> Decimal:
    return round_price(Decimal(str(value)))


def summarize_prices(prices: Sequence[HourlyPrice]) -> PriceSummary:
    """
    Descriptive statistics for a block of hourly prices.

    Args:
        prices: Hourly prices to summarize

    Returns:
        PriceSummary with min, max, mean and median rounded to 2 places
    """
    if not prices:
        return PriceSummary(count=0)

    stats = pd.Series([float(p.price) for p in prices]).describe()
    return PriceSummary(
        count=int(stats["count"]),
        minimum=_to_price(stats["min"]),
        maximum=_to_price(stats["max"]),
        average=_to_price(stats["mean"]),
        median=_to_price(stats["50%"]),
    )


def build_price_source() -> PriceSource:
    """
    Select the price source from configuration.

    Raises:
        ConfigError: If no ENTSO-E token is configured and simulation is disabled
    """
    if settings.use_simulated_data:
        logger.warning("Using simulated price data")
        return SimulatedPriceSource()

    if not settings.entsoe_api_token:
        raise ConfigError(
            "ENTSOE_API_TOKEN is not configured; set it or enable USE_SIMULATED_DATA"
        )

    return EntsoeClient(settings.entsoe_api_token)


class PriceService:
    """Unified service for price data fetching, caching and recommendations."""

    def __init__(
        self,
        source: Optional[PriceSource] = None,
        cache: Optional[PriceCache] = None,
        clock: Optional[Callable[[], datetime]] = None,
        fallback_to_simulated: Optional[bool] = None,
    ):
        self._source = source
        self.cache = cache if cache is not None else PriceCache()
        self._clock = clock or utc_now
        self._refresh_task: Optional[asyncio.Future] = None
        if fallback_to_simulated is None:
            fallback_to_simulated = settings.fallback_to_simulated
        self.fallback_to_simulated = fallback_to_simulated

    @property
    def source(self) -> PriceSource:
        """Configured price source, resolved on first use."""
        if self._source is None:
            self._source = build_price_source()
        return self._source

    def check_configuration(self) -> str:
        """Resolve the price source eagerly so configuration errors surface at startup."""
        source = self.source
        logger.info("Price source configured", source=source.name, market_zone=settings.market_zone)
        return source.name

    async def get_hourly_prices(self, now: Optional[datetime] = None) -> Tuple[HourlyPrice, ...]:
        """
        Return the normalized hourly series, refreshing the cache when it has expired.

        Only one refresh runs at a time. Callers arriving during a refresh await the
        same task and get its series or its exception.
        """
        now = now or self._clock()
        cached = self.cache.get(now)
        if cached is not None:
            return cached

        if self._refresh_task is None:
            self._refresh_task = asyncio.ensure_future(self._refresh(now))
        else:
            logger.debug("Joining in-flight price refresh")

        # Cancelling one caller leaves the shared refresh running
        return await asyncio.shield(self._refresh_task)

    async def _refresh(self, now: datetime) -> Tuple[HourlyPrice, ...]:
        try:
            series, source_name = await self._load_series(now)
            entry = self.cache.put(series, now, source=source_name)
            logger.info(
                "Refreshed price cache",
                hours=len(entry.series),
                source=source_name,
                first_hour=entry.series[0].hour_start.isoformat() if entry.series else None,
                last_hour=entry.series[-1].hour_start.isoformat() if entry.series else None,
            )
            return entry.series
        finally:
            self._refresh_task = None

    async def get_current_price(self, now: Optional[datetime] = None) -> HourlyPrice:
        """
        Price of the current hour.

        Raises:
            NoCurrentDataError: If the series has no entry for the current hour
        """
        now = now or self._clock()
        series = await self.get_hourly_prices(now)
        return find_current_price(series, now)

    async def get_past_prices(self, hours: int = 24, now: Optional[datetime] = None) -> List[HourlyPrice]:
        """Most recent `hours` hourly prices before the current hour, oldest first."""
        self._validate_hours(hours)
        now = now or self._clock()
        current_hour = truncate_to_hour(now)
        series = await self.get_hourly_prices(now)
        past = [p for p in series if p.hour_start < current_hour]
        return past[-hours:]

    async def get_future_prices(self, hours: int = 24, now: Optional[datetime] = None) -> List[HourlyPrice]:
        """Next `hours` hourly prices after the current hour, oldest first."""
        self._validate_hours(hours)
        now = now or self._clock()
        current_hour = truncate_to_hour(now)
        series = await self.get_hourly_prices(now)
        future = [p for p in series if p.hour_start > current_hour]
        return future[:hours]

    async def recommend_best_time(self, duration_hours: int = 1, look_ahead_hours: int = 24) -> Recommendation:
        """
        Recommend the cheapest window of `duration_hours` within `look_ahead_hours`.

        Raises:
            InvalidParameterError: Before fetching, for out-of-range parameters
            InsufficientDataError: If no complete window fits in the horizon
            NoCurrentDataError: If the current hour has no price
        """
        validate_parameters(duration_hours, look_ahead_hours)

        now = self._clock()
        series = await self.get_hourly_prices(now)
        recommendation = recommend(
            series,
            duration_hours,
            look_ahead_hours,
            now,
            display_timezone=settings.display_timezone,
        )

        logger.info(
            "Recommended best time",
            duration_hours=duration_hours,
            look_ahead_hours=look_ahead_hours,
            window_start=recommendation.window_start.isoformat(),
            average_price=str(recommendation.average_price),
            savings=str(recommendation.savings),
        )
        return recommendation

    async def get_price_overview(self, hours: int = 24) -> PriceOverviewResponse:
        """Summaries of the past and future `hours` around now, plus the current price if known."""
        # One reference time so the three blocks line up on the same current hour
        now = self._clock()
        past = await self.get_past_prices(hours, now=now)
        future = await self.get_future_prices(hours, now=now)
        try:
            current = await self.get_current_price(now)
        except NoCurrentDataError:
            current = None

        return PriceOverviewResponse(
            past=summarize_prices(past),
            future=summarize_prices(future),
            current=current,
        )

    def cache_status(self) -> dict:
        """Freshness information about the cached series."""
        entry = self.cache.entry
        if entry is None:
            return {"cached": False}

        now = self._clock()
        age = self.cache.age(now)
        return {
            "cached": True,
            "source": entry.source,
            "fetched_at": entry.fetched_at.isoformat(),
            "age_seconds": round(age.total_seconds(), 1),
            "expired": self.cache.get(now) is None,
            "hours": len(entry.series),
        }

    async def _load_series(self, now: datetime) -> Tuple[List[HourlyPrice], str]:
        """Fetch and normalize the series, falling back to simulated data if configured."""
        start, end = fetch_window(now)
        source = self.source

        try:
            periods = await source.fetch_day_ahead_prices(start, end)
        except FetchError as e:
            if not self.fallback_to_simulated or isinstance(source, SimulatedPriceSource):
                logger.error("Failed to fetch prices", error=str(e), kind=e.kind.value)
                raise
            logger.warning(
                "Price fetch failed, serving simulated prices instead",
                error=str(e),
                kind=e.kind.value,
            )
            source = SimulatedPriceSource()
            periods = await source.fetch_day_ahead_prices(start, end)

        return normalize_periods(periods, strict=settings.strict_resolution), source.name

    @staticmethod
    def _validate_hours(hours: int) -> None:
        if hours < 1:
            raise InvalidParameterError("Hours must be positive")


# Global price service instance
price_service = PriceService()

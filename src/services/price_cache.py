"""
In-memory cache for the normalized hourly series of one market zone.
"""

from datetime import datetime, timedelta
from typing import Optional, Sequence, Tuple

from src.config import settings
from src.models.price import CacheEntry, HourlyPrice
from src.utils.time_utils import ensure_utc


class PriceCache:
    """Single-entry TTL cache. The entry is replaced wholesale on every put."""

    def __init__(self, ttl_seconds: Optional[int] = None):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.cache_ttl_seconds
        self._entry: Optional[CacheEntry] = None

    def get(self, now: datetime) -> Optional[Tuple[HourlyPrice, ...]]:
        """Return the cached series if it is younger than the TTL, otherwise None."""
        entry = self._entry
        if entry is None:
            return None
        if ensure_utc(now) - entry.fetched_at < timedelta(seconds=entry.ttl_seconds):
            return entry.series
        return None

    def put(self, series: Sequence[HourlyPrice], now: datetime, source: Optional[str] = None) -> CacheEntry:
        """Store a new series, replacing whatever was cached."""
        entry = CacheEntry(
            fetched_at=ensure_utc(now),
            ttl_seconds=self.ttl_seconds,
            series=tuple(series),
            source=source,
        )
        self._entry = entry
        return entry

    def clear(self) -> None:
        """Drop the cached entry."""
        self._entry = None

    @property
    def entry(self) -> Optional[CacheEntry]:
        return self._entry

    def age(self, now: datetime) -> Optional[timedelta]:
        """Age of the cached entry, or None when empty."""
        if self._entry is None:
            return None
        return ensure_utc(now) - self._entry.fetched_at

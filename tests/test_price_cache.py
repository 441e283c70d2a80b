"""
Unit tests for the single-entry price cache.
"""

from datetime import datetime, timedelta, timezone

from src.services.price_cache import PriceCache

NOW = datetime(2026, 1, 2, 12, 0, tzinfo=timezone.utc)


class TestPriceCache:
    """Tests for TTL handling and wholesale replacement."""

    def test_empty_cache_misses(self):
        cache = PriceCache(ttl_seconds=3600)

        assert cache.get(NOW) is None
        assert cache.entry is None
        assert cache.age(NOW) is None

    def test_get_after_put_returns_series(self, hourly_series):
        cache = PriceCache(ttl_seconds=3600)
        series = hourly_series([10, 11, 12])

        cache.put(series, NOW)

        assert cache.get(NOW) == tuple(series)
        assert cache.get(NOW + timedelta(minutes=59, seconds=59)) == tuple(series)

    def test_expires_after_ttl(self, hourly_series):
        cache = PriceCache(ttl_seconds=3600)
        cache.put(hourly_series([10]), NOW)

        assert cache.get(NOW + timedelta(hours=1)) is None
        assert cache.get(NOW + timedelta(hours=2)) is None

    def test_put_replaces_entry(self, hourly_series):
        cache = PriceCache(ttl_seconds=3600)
        cache.put(hourly_series([10, 11]), NOW)
        later = NOW + timedelta(minutes=30)

        entry = cache.put(hourly_series([20]), later, source="stub")

        assert [p.price for p in cache.get(later)] == [20]
        assert entry.fetched_at == later
        assert entry.source == "stub"
        assert cache.entry is entry

    def test_clear(self, hourly_series):
        cache = PriceCache(ttl_seconds=3600)
        cache.put(hourly_series([10]), NOW)

        cache.clear()

        assert cache.get(NOW) is None
        assert cache.entry is None

    def test_age(self, hourly_series):
        cache = PriceCache(ttl_seconds=3600)
        cache.put(hourly_series([10]), NOW)

        assert cache.age(NOW + timedelta(minutes=15)) == timedelta(minutes=15)

    def test_default_ttl_is_one_hour(self):
        assert PriceCache().ttl_seconds == 3600

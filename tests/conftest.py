"""
Test configuration and fixtures for the Power Price Check tests.
Contains shared fixtures and test utilities.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, List, Sequence

import pytest
from fastapi.testclient import TestClient

from src.main import create_app
from src.models.price import HourlyPrice, RawPricePoint, TimeSeriesPeriod
from src.services.price_cache import PriceCache
from src.services.price_service import PriceService

# 00:30 UTC, inside the first hour of the fixture day
FIXED_NOW = datetime(2026, 1, 2, 0, 30, tzinfo=timezone.utc)
DAY_START = datetime(2026, 1, 2, 0, 0, tzinfo=timezone.utc)


def _hourly_series(start: datetime, prices: Sequence) -> List[HourlyPrice]:
    return [
        HourlyPrice(hour_start=start + timedelta(hours=i), price=Decimal(str(price)))
        for i, price in enumerate(prices)
    ]


def _hourly_period(start: datetime, prices_eur_mwh: Sequence) -> TimeSeriesPeriod:
    return TimeSeriesPeriod(
        period_start=start,
        resolution="PT60M",
        points=[
            RawPricePoint(position=i + 1, price_amount=Decimal(str(price)))
            for i, price in enumerate(prices_eur_mwh)
        ],
    )


class StubPriceSource:
    """Price source returning fixed periods and counting fetches."""

    def __init__(self, periods: List[TimeSeriesPeriod], delay: float = 0.0):
        self.periods = periods
        self.delay = delay
        self.calls = 0

    @property
    def name(self) -> str:
        return "stub"

    async def fetch_day_ahead_prices(self, start, end):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.periods


class FakeClock:
    """Adjustable clock for cache expiry tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def hourly_series() -> Callable[..., List[HourlyPrice]]:
    """
    Factory for hourly series starting at the fixture day's midnight.
    """
    def factory(prices: Sequence, start: datetime = DAY_START) -> List[HourlyPrice]:
        return _hourly_series(start, prices)
    return factory


@pytest.fixture
def daily_prices_eur_mwh() -> List[int]:
    """
    48 hours of EUR/MWh prices from the fixture day's midnight.
    Hours 02:00-05:00 on day one are cheap, everything else costs 100.
    """
    return [70 if 2 <= hour <= 5 else 100 for hour in range(48)]


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(FIXED_NOW)


@pytest.fixture
def stub_source(daily_prices_eur_mwh) -> StubPriceSource:
    return StubPriceSource([_hourly_period(DAY_START, daily_prices_eur_mwh)])


@pytest.fixture
def price_service(stub_source, fake_clock) -> PriceService:
    """PriceService wired to the stub source, a fresh cache and the fixed clock."""
    return PriceService(
        source=stub_source,
        cache=PriceCache(ttl_seconds=3600),
        clock=fake_clock,
        fallback_to_simulated=False,
    )


@pytest.fixture
def test_app():
    """
    Create a test instance of the FastAPI application.
    """
    app = create_app()
    return app


@pytest.fixture
def test_client(test_app):
    """
    Create a test client for the FastAPI application.
    """
    return TestClient(test_app)


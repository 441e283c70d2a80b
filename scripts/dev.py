#!/usr/bin/env python3
"""
Development helper scripts for the Power Price Check service.
Provides utilities for inspecting prices, recommendations and the cache.
"""

import asyncio
import sys
from pathlib import Path

# Add src to Python path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import settings
from src.exceptions import PriceAPIException
from src.logging_config import setup_logging
from src.services.price_service import price_service
from src.utils.time_utils import format_local_time


def _print_prices(prices):
    print("-" * 40)
    print(f"{'Hour (UTC)':<20} {'Local':<8} {'Price':>10}")
    print("-" * 40)
    for p in prices:
        print(f"{p.hour_start.strftime('%Y-%m-%d %H:%M'):<20} "
              f"{format_local_time(p.hour_start, settings.display_timezone):<8} "
              f"{p.price:>10} {p.unit}")


async def show_current_price():
    """Display the price of the current hour."""
    setup_logging()
    current = await price_service.get_current_price()
    print(f"Current price: {current.price} {current.unit}")
    print(f"Hour: {current.hour_start.isoformat()} "
          f"({format_local_time(current.hour_start, settings.display_timezone)} local)")


async def show_past_prices(hours: int = 12):
    """Display the most recent past hourly prices."""
    setup_logging()
    prices = await price_service.get_past_prices(hours)
    print(f"Past {hours} hours: {len(prices)} prices")
    _print_prices(prices)


async def show_future_prices(hours: int = 24):
    """Display upcoming hourly prices."""
    setup_logging()
    prices = await price_service.get_future_prices(hours)
    print(f"Next {hours} hours: {len(prices)} prices")
    _print_prices(prices)


async def show_summary(hours: int = 24):
    """Display price range, average and median around now."""
    setup_logging()
    overview = await price_service.get_price_overview(hours)
    for label, summary in (("Past", overview.past), ("Future", overview.future)):
        if summary.count == 0:
            print(f"{label}: no data")
            continue
        print(f"{label} {summary.count}h: range {summary.minimum} - {summary.maximum}, "
              f"average {summary.average}, median {summary.median} {summary.unit}")


async def show_recommendation(duration: int = 1, look_ahead_hours: int = 24):
    """Display the best time to run an appliance."""
    setup_logging()
    rec = await price_service.recommend_best_time(duration, look_ahead_hours)
    print(rec.message)
    print(f"Window: {rec.window_start.isoformat()} -> {rec.window_end.isoformat()}")
    print(f"Average price: {rec.average_price} {rec.unit}")
    print(f"Current price: {rec.current_price} {rec.unit}")
    print(f"Savings: {rec.savings} {rec.unit} ({rec.savings_percentage}%)")


async def inspect_cache():
    """Load prices and display the cache state."""
    setup_logging()
    await price_service.get_hourly_prices()
    status = price_service.cache_status()
    print("Price cache:")
    print("-" * 40)
    for key, value in status.items():
        print(f"{key:<14} {value}")


def show_config():
    """Display current configuration settings."""
    print("Current Configuration:")
    print("-" * 40)
    print(f"API Host: {settings.api_host}")
    print(f"API Port: {settings.api_port}")
    print(f"Debug Mode: {settings.api_debug}")
    print(f"ENTSO-E URL: {settings.entsoe_base_url}")
    print(f"ENTSO-E Token: {'configured' if settings.entsoe_api_token else 'missing'}")
    print(f"Market Zone: {settings.market_zone}")
    print(f"Cache TTL: {settings.cache_ttl_seconds}s")
    print(f"Strict Resolution: {settings.strict_resolution}")
    print(f"Simulated Data: {settings.use_simulated_data} (fallback: {settings.fallback_to_simulated})")
    print(f"Display Timezone: {settings.display_timezone}")
    print(f"Log Level: {settings.log_level}")


def main():
    """Main script entry point with command selection."""
    if len(sys.argv) < 2:
        print("Power Price Check Development Scripts")
        print("Usage: python scripts/dev.py <command> [args]")
        print("\nAvailable commands:")
        print("  current                      - Show the current hour's price")
        print("  past [hours]                 - Show past hourly prices (default 12)")
        print("  future [hours]               - Show future hourly prices (default 24)")
        print("  summary [hours]              - Show price range and average around now")
        print("  recommend [duration] [ahead] - Recommend the best time (default 1h within 24h)")
        print("  inspect-cache                - Load prices and show the cache state")
        print("  show-config                  - Display current configuration")
        return

    command = sys.argv[1]
    args = [int(a) for a in sys.argv[2:]]

    try:
        if command == "current":
            asyncio.run(show_current_price())
        elif command == "past":
            asyncio.run(show_past_prices(*args))
        elif command == "future":
            asyncio.run(show_future_prices(*args))
        elif command == "summary":
            asyncio.run(show_summary(*args))
        elif command == "recommend":
            asyncio.run(show_recommendation(*args))
        elif command == "inspect-cache":
            asyncio.run(inspect_cache())
        elif command == "show-config":
            show_config()
        else:
            print(f"Unknown command: {command}")
            print("Run without arguments to see available commands")
    except PriceAPIException as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

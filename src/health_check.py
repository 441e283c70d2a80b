"""
Health check module for Docker health checks and monitoring.
Verifies configuration and that a current price can be served.
"""

import asyncio
import sys

from src.exceptions import PriceAPIException
from src.logging_config import get_logger, setup_logging
from src.services.price_service import price_service

logger = get_logger(__name__)


async def health_check() -> bool:
    """
    Check that the price source is configured and the current hour has a price.
    """
    try:
        price_service.check_configuration()
        current = await price_service.get_current_price()
        logger.debug("Current price available", hour_start=current.hour_start.isoformat(), price=str(current.price))
        return True

    except PriceAPIException as e:
        logger.error("Health check failed", error=str(e), error_type=type(e).__name__)
        return False


async def main():
    """
    Main health check entry point for command line usage.
    """
    setup_logging()
    is_healthy = await health_check()

    if is_healthy:
        logger.info("Health check passed")
        sys.exit(0)
    else:
        logger.error("Health check failed")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())

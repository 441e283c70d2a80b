"""
Services package for the Power Price Check service.
Contains the normalizer, price cache, recommendation engine and unified price service.
"""

from .price_cache import PriceCache
from .price_service import price_service, PriceService

__all__ = [
    "price_service",
    "PriceCache",
    "PriceService",
]

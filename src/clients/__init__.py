"""
Price source clients for the Power Price Check service.
Contains the ENTSO-E market data client and the simulated price source.
"""

from .entsoe_client import EntsoeClient, parse_market_document
from .simulated_source import SimulatedPriceSource

__all__ = [
    "EntsoeClient",
    "SimulatedPriceSource",
    "parse_market_document",
]

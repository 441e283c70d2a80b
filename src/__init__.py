"""
Power Price Check - Day-Ahead Electricity Price Recommendations

A small service that retrieves day-ahead prices for one market zone from the
ENTSO-E Transparency Platform and recommends the cheapest time to run an appliance.

Main components:
- ENTSO-E client and simulated price source
- Resolution normalizer for 15/30/60 minute series
- Single-entry price cache with a one-hour TTL
- Recommendation engine for the cheapest contiguous window
- Domain exceptions for clear error handling
"""

__version__ = "1.0.0"

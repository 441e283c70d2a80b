"""
ENTSO-E Transparency Platform client - fetches day-ahead prices (document A44)
for one bidding zone and parses the XML market document into raw periods.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
import xml.etree.ElementTree as ET

import httpx

from src.config import settings
from src.exceptions import ConfigError, DataError, FetchError, FetchErrorKind
from src.logging_config import get_logger
from src.models.price import RawPricePoint, TimeSeriesPeriod
from src.utils.time_utils import ensure_utc, format_entsoe_date

logger = get_logger(__name__)

DAY_AHEAD_PRICES_DOCUMENT = "A44"
PUBLICATION_DOCUMENT = "Publication_MarketDocument"
ACKNOWLEDGEMENT_DOCUMENT = "Acknowledgement_MarketDocument"


def _local_name(tag: str) -> str:
    """Strip the XML namespace from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _parse_instant(value: str) -> datetime:
    """Parse ENTSO-E instants such as '2026-01-02T23:00Z'."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(text))


def parse_market_document(content: bytes) -> List[TimeSeriesPeriod]:
    """
    Parse a Publication_MarketDocument into raw periods.

    Args:
        content: Raw XML response body

    Returns:
        One TimeSeriesPeriod per <Period> that carries points

    Raises:
        DataError: If the document is not valid XML, is not a publication
                   document, or contains unparseable values
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise DataError(f"Invalid XML response from ENTSO-E API: {e}")

    document_type = _local_name(root.tag)
    if document_type == ACKNOWLEDGEMENT_DOCUMENT:
        reason = root.findtext("{*}Reason/{*}text") or "no reason given"
        raise DataError(f"ENTSO-E returned no data: {reason}")
    if document_type != PUBLICATION_DOCUMENT:
        raise DataError(f"Unexpected ENTSO-E document type: {document_type}")

    periods = []
    try:
        for series in root.findall("{*}TimeSeries"):
            for period in series.findall("{*}Period"):
                point_elements = period.findall("{*}Point")
                if not point_elements:
                    logger.debug("Skipping period without points")
                    continue

                start_text = period.findtext("{*}timeInterval/{*}start")
                if not start_text:
                    raise DataError("Period without timeInterval start")

                points = [
                    RawPricePoint(
                        position=int(point.findtext("{*}position")),
                        price_amount=Decimal(point.findtext("{*}price.amount").strip()),
                    )
                    for point in point_elements
                ]
                periods.append(TimeSeriesPeriod(
                    period_start=_parse_instant(start_text),
                    resolution=period.findtext("{*}resolution"),
                    points=points,
                ))
    except DataError:
        raise
    except (ValueError, TypeError, AttributeError, ArithmeticError) as e:
        raise DataError(f"Malformed price point in ENTSO-E response: {e}")

    return periods


class EntsoeClient:
    """Async client for the ENTSO-E day-ahead price endpoint."""

    def __init__(
        self,
        api_token: Optional[str],
        base_url: Optional[str] = None,
        market_zone: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_token:
            raise ConfigError("ENTSO-E API token is required")
        self.api_token = api_token
        self.base_url = base_url or settings.entsoe_base_url
        self.market_zone = market_zone or settings.market_zone
        self.timeout = timeout if timeout is not None else settings.fetch_timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "entsoe"

    async def fetch_day_ahead_prices(self, start: datetime, end: datetime) -> List[TimeSeriesPeriod]:
        """Fetch and parse day-ahead prices between start and end (UTC)."""
        params = self._build_params(start, end)
        content = await self._fetch_xml(params)
        periods = parse_market_document(content)

        logger.info(
            "Fetched day-ahead prices",
            market_zone=self.market_zone,
            period_start=params["periodStart"],
            period_end=params["periodEnd"],
            periods=len(periods),
        )
        return periods

    def _build_params(self, start: datetime, end: datetime) -> Dict[str, str]:
        """Build the query parameters for the A44 request."""
        return {
            "securityToken": self.api_token,
            "documentType": DAY_AHEAD_PRICES_DOCUMENT,
            "in_Domain": self.market_zone,
            "out_Domain": self.market_zone,
            "periodStart": format_entsoe_date(start),
            "periodEnd": format_entsoe_date(end),
        }

    async def _fetch_xml(self, params: Dict[str, str]) -> bytes:
        """Download the market document, retrying a connection failure once."""
        try:
            response = await self._get(params)
        except httpx.TransportError as e:
            logger.warning("ENTSO-E request failed, retrying once", error=str(e))
            try:
                response = await self._get(params)
            except httpx.TransportError as e:
                raise FetchError(f"Failed to connect to ENTSO-E API: {e}", kind=FetchErrorKind.UNREACHABLE)

        self._raise_for_status(response)
        return response.content

    async def _get(self, params: Dict[str, str]) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            return await client.get(self.base_url, params=params)

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        """Map HTTP error statuses to FetchError kinds."""
        status = response.status_code
        if status == 401:
            raise FetchError("Invalid ENTSO-E API token", kind=FetchErrorKind.UNAUTHORIZED)
        if status == 400:
            raise FetchError("Invalid request parameters", kind=FetchErrorKind.BAD_REQUEST)
        if response.is_error:
            raise FetchError(f"ENTSO-E API error: {status}", kind=FetchErrorKind.UPSTREAM)

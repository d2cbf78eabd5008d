"""Amadeus GDS provider adapter."""

from __future__ import annotations

import logging
from typing import Any

from layover_core.schemas import DataSource, Offer, SearchRequest
from layover_providers.base import FlightProvider, filter_itineraries
from layover_providers.config import settings

from .client import AmadeusClient
from .response_parser import parse_flight_offers

logger = logging.getLogger(__name__)


class AmadeusProvider(FlightProvider):
    """Flight offers via the Amadeus Self-Service ``Flight Offers Search`` API.

    Requires ``PROVIDER_AMADEUS_CLIENT_ID`` and
    ``PROVIDER_AMADEUS_CLIENT_SECRET`` environment variables.
    """

    source = DataSource.GDS

    def __init__(self, *, client: AmadeusClient | None = None) -> None:
        self._client = client or AmadeusClient()

    @staticmethod
    def build_params(request: SearchRequest) -> dict[str, Any]:
        params: dict[str, Any] = {
            "originLocationCode": request.origin,
            "destinationLocationCode": request.destination,
            "departureDate": request.departure_date.isoformat(),
            "adults": request.passengers.adults,
            "travelClass": request.cabin_class.value,
            "currencyCode": request.currency,
            "max": settings.max_results,
        }
        if request.passengers.children:
            params["children"] = request.passengers.children
        if request.passengers.infants:
            params["infants"] = request.passengers.infants
        if request.return_date is not None:
            params["returnDate"] = request.return_date.isoformat()
        if request.max_connections == 0:
            params["nonStop"] = "true"
        return params

    async def search(self, request: SearchRequest) -> list[Offer]:
        """Search for offers via the Amadeus GDS API."""
        body = await self._client.search_flight_offers(self.build_params(request))
        offers = filter_itineraries(parse_flight_offers(body), request)
        logger.info(
            "Amadeus returned %d offers for %s-%s",
            len(offers),
            request.origin,
            request.destination,
        )
        return offers

    async def health_check(self) -> bool:
        """Check if the Amadeus API is reachable and credentials are valid."""
        return await self._client.health_check()

    async def close(self) -> None:
        await self._client.close()

"""Duffel provider adapter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from layover_core.errors import ProviderFailure
from layover_core.schemas import DataSource, Offer, SearchRequest
from layover_providers.base import FlightProvider, filter_itineraries

from .client import DuffelClient
from .response_parser import parse_duffel_offers

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

# Duffel accepts at most two connections per slice.
_MAX_CONNECTIONS = 2


class DuffelProvider(FlightProvider):
    """Fetches bookable offers from the Duffel API."""

    source = DataSource.DUFFEL

    def __init__(
        self,
        *,
        access_token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = DuffelClient(access_token=access_token, transport=transport)

    @staticmethod
    def build_payload(request: SearchRequest) -> dict[str, Any]:
        slices = [
            {
                "origin": request.origin,
                "destination": request.destination,
                "departure_date": request.departure_date.isoformat(),
            }
        ]
        if request.return_date is not None:
            slices.append(
                {
                    "origin": request.destination,
                    "destination": request.origin,
                    "departure_date": request.return_date.isoformat(),
                }
            )

        pax = request.passengers
        passengers: list[dict[str, Any]] = [{"type": "adult"}] * pax.adults
        passengers += [{"age": 10}] * pax.children
        passengers += [{"age": 1}] * pax.infants

        return {
            "slices": slices,
            "passengers": passengers,
            "cabin_class": request.cabin_class.value.lower(),
            "max_connections": min(request.max_connections, _MAX_CONNECTIONS),
        }

    async def search(self, request: SearchRequest) -> list[Offer]:
        """Create a Duffel offer request and return normalized offers."""
        data = await self._client.create_offer_request(self.build_payload(request))
        offers = filter_itineraries(parse_duffel_offers(data), request)
        logger.info(
            "Duffel returned %d offers for %s-%s",
            len(offers),
            request.origin,
            request.destination,
        )
        return offers

    async def health_check(self) -> bool:
        if not self._client.configured:
            return False
        try:
            await self._client.list_airlines()
        except ProviderFailure:
            return False
        return True

    async def close(self) -> None:
        await self._client.close()

"""Kiwi Tequila provider adapter."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from layover_core.errors import ProviderFailure
from layover_core.schemas import CabinClass, DataSource, Offer, SearchRequest
from layover_providers.base import FlightProvider, filter_itineraries
from layover_providers.config import settings

from .client import KiwiClient
from .response_parser import parse_kiwi_response

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

_CABIN_MAP: dict[CabinClass, str] = {
    CabinClass.ECONOMY: "M",
    CabinClass.PREMIUM_ECONOMY: "W",
    CabinClass.BUSINESS: "C",
    CabinClass.FIRST: "F",
}


class KiwiProvider(FlightProvider):
    """Fetches connecting itineraries from the Kiwi Tequila API."""

    source = DataSource.KIWI_API

    def __init__(
        self,
        *,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = KiwiClient(api_key=api_key, transport=transport)

    @staticmethod
    def build_params(request: SearchRequest) -> dict[str, Any]:
        day = request.departure_date.strftime("%d/%m/%Y")
        params: dict[str, Any] = {
            "fly_from": request.origin,
            "fly_to": request.destination,
            "date_from": day,
            "date_to": day,
            "adults": request.passengers.adults,
            "children": request.passengers.children,
            "infants": request.passengers.infants,
            "selected_cabins": _CABIN_MAP.get(request.cabin_class, "M"),
            "max_stopovers": request.max_connections,
            "curr": request.currency,
            "limit": settings.max_results,
        }
        if request.return_date is not None:
            back = request.return_date.strftime("%d/%m/%Y")
            params["return_from"] = back
            params["return_to"] = back
        return params

    async def search(self, request: SearchRequest) -> list[Offer]:
        """Search Kiwi and return normalized offers."""
        raw = await self._client.search_flights(self.build_params(request))
        offers = filter_itineraries(
            parse_kiwi_response(raw, currency=request.currency), request
        )
        logger.info(
            "Kiwi returned %d offers for %s-%s",
            len(offers),
            request.origin,
            request.destination,
        )
        return offers

    async def health_check(self) -> bool:
        """Return *True* if the API key is configured and the API is reachable."""
        if not self._client.configured:
            return False
        try:
            resp = await self._client.search_flights(
                {
                    "fly_from": "LHR",
                    "fly_to": "SIN",
                    "date_from": "01/01/2099",
                    "date_to": "01/01/2099",
                    "adults": 1,
                    "limit": 1,
                },
            )
        except ProviderFailure:
            return False
        return "data" in resp

    async def close(self) -> None:
        """Release the underlying HTTP client."""
        await self._client.close()

"""Abstract base class for all flight-data providers."""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from layover_core.schemas import DataSource, Offer, SearchRequest


class FlightProvider(abc.ABC):
    """Base class that all provider adapters must implement.

    ``search`` returns fully normalized offers or raises a
    :class:`~layover_core.errors.ProviderFailure`; an empty list means the
    provider answered with no itineraries.
    """

    source: DataSource

    @property
    def name(self) -> str:
        return self.source.value

    @abc.abstractmethod
    async def search(self, request: SearchRequest) -> list[Offer]:
        """Search the provider and return normalized offers."""

    @abc.abstractmethod
    async def health_check(self) -> bool:
        """Return True if the provider is configured and reachable."""

    @abc.abstractmethod
    async def close(self) -> None:
        """Release any held resources (HTTP clients, SDK handles, etc.)."""


def filter_itineraries(offers: list[Offer], request: SearchRequest) -> list[Offer]:
    """Apply the connection limit and the layover preference of a request.

    Offers with more connections than ``max_connections`` in either
    direction are dropped. When layovers are preferred, direct itineraries
    are dropped too.
    """
    kept: list[Offer] = []
    for offer in offers:
        legs = [offer.outbound, *([offer.inbound] if offer.inbound else [])]
        if any(len(leg) - 1 > request.max_connections for leg in legs):
            continue
        if request.prefer_layovers and not offer.layovers:
            continue
        kept.append(offer)
    return kept

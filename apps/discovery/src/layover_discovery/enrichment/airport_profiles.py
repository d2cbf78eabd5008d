"""Airport comfort, nearby hotels and safety.

The profiles below are curated reference data for the major connecting
hubs; any other airport gets :data:`TYPICAL_HUB`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from layover_core.schemas import (
    AirportAmenities,
    AirportProfile,
    HotelOption,
    SafetyRating,
)
from layover_discovery.cache.cache_keys import airport_profile_key
from layover_discovery.config import settings

if TYPE_CHECKING:
    from layover_discovery.cache import ResultCache
    from layover_discovery.enrichment.base import AirportProfileProvider

logger = logging.getLogger(__name__)


def _hub(
    rating: float,
    lounges: list[str],
    restaurants: int,
    safety: float,
    *,
    sleeping: bool = True,
    spa: bool = True,
    children: bool = True,
    hotels: list[HotelOption] | None = None,
) -> tuple[AirportAmenities, list[HotelOption], SafetyRating]:
    amenities = AirportAmenities(
        free_wifi=True,
        lounges=lounges,
        showers=True,
        sleeping_areas=sleeping,
        restaurant_count=restaurants,
        shopping=True,
        spa=spa,
        currency_exchange=True,
        medical_center=True,
        children_area=children,
        rating=rating,
    )
    level = "high" if safety >= 8.5 else "moderate" if safety >= 6.5 else "low"
    return amenities, hotels or [], SafetyRating(score=safety, level=level)


def _transit_hotel(name: str, price: float, rating: float = 4.1) -> HotelOption:
    return HotelOption(
        name=name, distance_km=0.2, rating=rating, price=price, day_room_available=True
    )


_PROFILES = {
    "DXB": _hub(4.4, ["Emirates Lounge", "Marhaba Lounge"], 120, 9.0,
                hotels=[_transit_hotel("Dubai International Hotel", 180, 4.4)]),
    "DOH": _hub(4.7, ["Al Mourjan Lounge", "Oryx Lounge"], 60, 9.2,
                hotels=[_transit_hotel("Oryx Airport Hotel", 150, 4.5)]),
    "SIN": _hub(4.8, ["SATS Premier Lounge", "Plaza Premium Lounge"], 150, 9.5,
                hotels=[_transit_hotel("Crowne Plaza Changi Airport", 220, 4.6),
                        _transit_hotel("Aerotel Singapore", 110, 4.2)]),
    "HKG": _hub(4.5, ["The Wing", "Plaza Premium Lounge"], 90, 8.8,
                hotels=[_transit_hotel("Regal Airport Hotel", 160, 4.3)]),
    "ICN": _hub(4.6, ["Matina Lounge", "Sky Hub Lounge"], 100, 9.0,
                hotels=[_transit_hotel("Darakhyu Capsule Hotel", 90, 4.2)]),
    "HND": _hub(4.6, ["TIAT Lounge"], 70, 9.3),
    "NRT": _hub(4.3, ["IASS Executive Lounge"], 60, 9.2),
    "IST": _hub(4.2, ["IGA Lounge", "Turkish Airlines Lounge"], 100, 8.0,
                hotels=[_transit_hotel("YOTELAir Istanbul Airport", 130, 4.2)]),
    "AMS": _hub(4.3, ["Aspire Lounge", "KLM Crown Lounge"], 70, 8.8,
                hotels=[_transit_hotel("YOTELAir Amsterdam Schiphol", 140, 4.1)]),
    "FRA": _hub(4.0, ["Lufthansa Lounge", "Primeclass Lounge"], 80, 8.6, spa=False),
    "MUC": _hub(4.4, ["Lufthansa Lounge"], 60, 9.0,
                hotels=[_transit_hotel("Hilton Munich Airport", 190, 4.4)]),
    "HEL": _hub(4.3, ["Plaza Premium Lounge"], 40, 9.3),
    "ZRH": _hub(4.4, ["Swiss Lounge"], 50, 9.2, children=False),
    "LHR": _hub(4.0, ["Plaza Premium Lounge", "No1 Lounge"], 90, 8.5,
                hotels=[_transit_hotel("Sofitel London Heathrow", 210, 4.3)]),
    "CDG": _hub(3.7, ["Extime Lounge"], 70, 7.8, sleeping=False),
    "MAD": _hub(3.9, ["Sala VIP Puerta de Alcala"], 60, 8.2, spa=False),
    "BKK": _hub(3.9, ["Miracle Lounge"], 110, 7.5,
                hotels=[_transit_hotel("Novotel Suvarnabhumi", 100, 4.2)]),
    "KUL": _hub(3.9, ["Plaza Premium Lounge"], 80, 7.8),
    "ADD": _hub(3.3, ["Ethiopian Cloud Nine Lounge"], 20, 7.0, spa=False, children=False),
}

TYPICAL_HUB = _hub(3.5, ["Premium Lounge"], 8, 7.5, sleeping=False, spa=False)


def neutral_profile(airport: str) -> AirportProfile:
    """Used when the profile lookup fails: no amenities, average safety."""
    return AirportProfile(airport=airport)


class CuratedAirportProfiles:
    """Profiles from the curated hub table."""

    async def profile(self, airport: str) -> AirportProfile:
        code = airport.upper()
        amenities, hotels, safety = _PROFILES.get(code, TYPICAL_HUB)
        return AirportProfile(airport=code, amenities=amenities, hotels=hotels, safety=safety)


class CachedAirportProfiles:
    """Wraps a profile source with the long-lived airport profile cache."""

    def __init__(
        self,
        source: AirportProfileProvider,
        cache: ResultCache,
        *,
        ttl: int | None = None,
    ) -> None:
        self._source = source
        self._cache = cache
        self._ttl = settings.airport_profile_cache_ttl if ttl is None else ttl

    async def profile(self, airport: str) -> AirportProfile:
        key = airport_profile_key(airport)
        cached = await self._cache.get(key)
        if cached is not None:
            try:
                profile = AirportProfile.model_validate(cached)
            except ValidationError as exc:
                logger.warning("Discarding unreadable airport profile %s: %s", key, exc)
            else:
                logger.debug("Airport profile cache hit for %s", airport)
                return profile

        profile = await self._source.profile(airport)
        await self._cache.set(key, profile.model_dump(mode="json"), self._ttl)
        return profile

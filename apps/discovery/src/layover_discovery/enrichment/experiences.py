"""Things to do during a layover, matched against the current weather.

Two sources implement the experience lookup: the Viator partner API and
:class:`CuratedExperienceCatalog`, a hand-maintained catalog used when no
Viator key is configured (development, tests, offline demos).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, NamedTuple

import httpx

from layover_core.schemas import Activity, ActivityType
from layover_discovery.config import settings

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from layover_core.schemas import WeatherSnapshot

logger = logging.getLogger(__name__)

MIN_WEATHER_SCORE = 0.3
# Customs, security and a round trip into town for a typical airport.
CITY_TRIP_OVERHEAD_MINUTES = 180

# Viator destination ids by city name
VIATOR_DESTINATION_IDS: dict[str, int] = {
    "Dubai": 828,
    "Istanbul": 585,
    "Singapore": 18,
    "Doha": 684,
    "Amsterdam": 10177,
    "Reykjavik": 24794,
    "New York": 3,
    "London": 1,
    "Paris": 2,
    "Rome": 19,
    "Tokyo": 334,
    "Sydney": 357,
}

_INDOOR_HINTS = ("museum", "gallery", "restaurant", "food", "cultural", "shopping", "spa")
_OUTDOOR_HINTS = ("outdoor", "beach", "park", "nature", "hiking", "desert", "garden")


def _weather_match(activity: Activity, weather: WeatherSnapshot) -> Activity:
    score = 1.0
    warnings: list[str] = []
    good = weather.is_good_for_outdoor

    if activity.activity_type is ActivityType.OUTDOOR:
        if not good:
            score *= 0.3
            warnings.append("Weather not ideal for outdoor activities")
        if weather.precipitation > 0:
            score *= 0.5
            warnings.append("Rain expected - bring umbrella")
        if weather.temperature < 5 or weather.temperature > 35:
            score *= 0.4
            warnings.append("Extreme temperatures - dress appropriately")
        recommendation = (
            "Great weather for this activity!" if good else "Consider indoor alternatives"
        )
    elif activity.activity_type is ActivityType.MIXED:
        if not good:
            score *= 0.6
            warnings.append("Weather may affect experience quality")
        if weather.precipitation > 0:
            score *= 0.8
        recommendation = (
            "Good weather conditions" if good else "Weather may impact experience - check conditions"
        )
    else:
        recommendation = (
            "Good option regardless of weather" if good else "Perfect choice for current weather"
        )

    if activity.requires_transit and weather.precipitation > 5:
        score *= 0.7
        warnings.append("Heavy rain may delay transit")

    return activity.model_copy(
        update={
            "weather_score": round(min(score, 1.0), 3),
            "weather_recommendation": recommendation,
            "warnings": [*activity.warnings, *warnings],
        }
    )


def match_activities(
    activities: Iterable[Activity], weather: WeatherSnapshot, limit: int | None = None
) -> list[Activity]:
    """Score activities against the weather and rank them.

    Indoor activities come first in poor conditions. Activities scoring
    below :data:`MIN_WEATHER_SCORE` are dropped unless nothing else is left.
    """
    bad_weather = not weather.is_good_for_outdoor or weather.precipitation > 0
    matched = [_weather_match(a, weather) for a in activities]

    def _rank(a: Activity) -> tuple[float, int, float, str]:
        indoor_first = 0 if (not bad_weather or a.activity_type is ActivityType.INDOOR) else 1
        return (-(a.weather_score or 0.0), indoor_first, -a.rating, a.id)

    matched.sort(key=_rank)
    kept = [a for a in matched if (a.weather_score or 0.0) >= MIN_WEATHER_SCORE] or matched
    return kept[:limit] if limit is not None else kept


def infer_activity_type(title: str, categories: Iterable[str]) -> ActivityType:
    text = " ".join([title, *categories]).lower()
    if any(hint in text for hint in _INDOOR_HINTS):
        return ActivityType.INDOOR
    if any(hint in text for hint in _OUTDOOR_HINTS):
        return ActivityType.OUTDOOR
    return ActivityType.MIXED


class _Entry(NamedTuple):
    slug: str
    name: str
    categories: tuple[str, ...]
    activity_type: ActivityType
    duration: int
    rating: float
    price: float
    requires_transit: bool = True


_I, _O, _M = ActivityType.INDOOR, ActivityType.OUTDOOR, ActivityType.MIXED

# Available at any airport; no immigration needed.
AIRPORT_ACTIVITIES: tuple[_Entry, ...] = (
    _Entry("rest-area", "Airport Rest Area", ("rest",), _I, 120, 3.5, 0, False),
    _Entry("lounge", "Premium Lounge Access", ("lounge", "food"), _I, 180, 4.5, 45, False),
    _Entry("spa", "Airport Spa Treatment", ("spa", "wellness"), _I, 60, 4.3, 70, False),
    _Entry("duty-free", "Duty-Free Shopping", ("shopping",), _I, 60, 3.5, 0, False),
)

CITY_ACTIVITIES: dict[str, tuple[_Entry, ...]] = {
    "dubai": (
        _Entry("burj-khalifa", "Burj Khalifa At the Top", ("sightseeing", "architecture"), _I, 90, 4.7, 45),
        _Entry("dubai-mall", "Dubai Mall and Fountain Show", ("shopping", "food"), _I, 120, 4.6, 0),
        _Entry("old-dubai", "Old Dubai Souks and Abra Ride", ("culture", "walking"), _M, 150, 4.5, 25),
        _Entry("desert-safari", "Desert Safari Express", ("desert", "adventure"), _O, 240, 4.4, 90),
    ),
    "doha": (
        _Entry("museum-islamic-art", "Museum of Islamic Art", ("museum", "culture"), _I, 120, 4.8, 0),
        _Entry("souq-waqif", "Souq Waqif Evening Walk", ("culture", "food"), _M, 90, 4.6, 0),
        _Entry("corniche", "Doha Corniche Promenade", ("walking", "park"), _O, 60, 4.4, 0),
        _Entry("national-museum", "National Museum of Qatar", ("museum", "architecture"), _I, 120, 4.7, 15),
    ),
    "istanbul": (
        _Entry("hagia-sophia", "Hagia Sophia and Blue Mosque", ("culture", "architecture"), _I, 150, 4.8, 25),
        _Entry("grand-bazaar", "Grand Bazaar Shopping", ("shopping", "culture"), _I, 120, 4.5, 0),
        _Entry("bosphorus", "Bosphorus Cruise", ("sightseeing", "outdoor"), _O, 90, 4.6, 20),
    ),
    "amsterdam": (
        _Entry("rijksmuseum", "Rijksmuseum Highlights", ("museum", "art"), _I, 120, 4.8, 25),
        _Entry("canal-cruise", "Canal Cruise", ("sightseeing",), _M, 75, 4.5, 18),
        _Entry("vondelpark", "Vondelpark Bike Ride", ("park", "cycling"), _O, 90, 4.3, 15),
    ),
    "singapore": (
        _Entry("jewel", "Jewel Changi Rain Vortex", ("architecture", "shopping"), _I, 90, 4.8, 0, False),
        _Entry("gardens-by-the-bay", "Gardens by the Bay", ("garden", "nature"), _O, 120, 4.7, 20),
        _Entry("hawker", "Hawker Centre Food Tour", ("food", "culture"), _I, 90, 4.6, 15),
        _Entry("marina-bay", "Marina Bay Sands SkyPark", ("sightseeing",), _M, 60, 4.5, 26),
    ),
    "london": (
        _Entry("british-museum", "British Museum", ("museum", "history"), _I, 120, 4.8, 0),
        _Entry("westminster", "Westminster Walking Tour", ("walking", "sightseeing"), _O, 120, 4.5, 20),
        _Entry("borough-market", "Borough Market Tasting", ("food",), _I, 90, 4.6, 30),
    ),
    "paris": (
        _Entry("louvre", "Louvre Museum Express", ("museum", "art"), _I, 150, 4.7, 22),
        _Entry("seine", "Seine River Cruise", ("sightseeing",), _M, 60, 4.5, 17),
        _Entry("montmartre", "Montmartre Walk", ("walking", "culture"), _O, 120, 4.4, 0),
    ),
    "frankfurt": (
        _Entry("romerberg", "Romerberg Old Town Walk", ("walking", "history"), _O, 90, 4.3, 0),
        _Entry("stadel", "Stadel Museum", ("museum", "art"), _I, 120, 4.6, 16),
    ),
    "hong kong": (
        _Entry("victoria-peak", "Victoria Peak Tram", ("sightseeing", "outdoor"), _O, 120, 4.6, 10),
        _Entry("dim-sum", "Dim Sum Food Tour", ("food", "culture"), _I, 120, 4.7, 45),
    ),
    "seoul": (
        _Entry("gyeongbokgung", "Gyeongbokgung Palace", ("history", "culture"), _M, 120, 4.6, 3),
        _Entry("myeongdong", "Myeongdong Street Food and Shopping", ("food", "shopping"), _I, 120, 4.5, 0),
    ),
    "tokyo": (
        _Entry("asakusa", "Asakusa and Senso-ji", ("culture", "walking"), _M, 120, 4.6, 0),
        _Entry("tsukiji", "Tsukiji Outer Market Food Walk", ("food",), _I, 90, 4.6, 30),
    ),
    "bangkok": (
        _Entry("grand-palace", "Grand Palace and Wat Pho", ("culture", "history"), _M, 180, 4.7, 15),
        _Entry("chatuchak", "Chatuchak Weekend Market", ("shopping", "food"), _I, 120, 4.4, 0),
    ),
}


def _to_activity(entry: _Entry, city: str) -> Activity:
    return Activity(
        id=f"curated_{entry.slug}",
        name=entry.name,
        city=city,
        categories=list(entry.categories),
        activity_type=entry.activity_type,
        duration_minutes=entry.duration,
        rating=entry.rating,
        price=entry.price,
        requires_transit=entry.requires_transit,
    )


class CuratedExperienceCatalog:
    """Offline catalog of layover activities, keyed by city name."""

    def __init__(self, *, max_results: int | None = None) -> None:
        self._max_results = settings.max_activities if max_results is None else max_results

    def candidates(self, city: str, duration_minutes: int) -> list[Activity]:
        entries = (*CITY_ACTIVITIES.get(city.strip().lower(), ()), *AIRPORT_ACTIVITIES)
        fits: list[Activity] = []
        for entry in entries:
            needed = entry.duration + (
                CITY_TRIP_OVERHEAD_MINUTES if entry.requires_transit else 0
            )
            if needed <= duration_minutes:
                fits.append(_to_activity(entry, city))
        return fits

    async def search(
        self,
        city: str,
        duration_minutes: int,
        airport: str,
        arrival: datetime,
        weather: WeatherSnapshot,
    ) -> list[Activity]:
        found = match_activities(
            self.candidates(city, duration_minutes), weather, self._max_results
        )
        logger.debug("Curated catalog: %d activities for %s (%s)", len(found), city, airport)
        return found


def parse_viator_products(products: list[dict[str, Any]], city: str) -> list[Activity]:
    """Convert Viator ``/products/search`` summaries into :class:`Activity`."""
    activities: list[Activity] = []
    for product in products:
        try:
            categories = [
                c["name"] if isinstance(c, dict) else str(c)
                for c in product.get("categories") or []
            ]
            duration = product.get("duration") or {}
            pricing = (product.get("pricing") or {}).get("summary") or {}
            reviews = product.get("reviews") or {}
            title = product["title"]
            activities.append(
                Activity(
                    id=f"viator_{product['productCode']}",
                    name=title,
                    city=city,
                    categories=categories,
                    activity_type=infer_activity_type(title, categories),
                    duration_minutes=int(
                        duration.get("fixedDurationInMinutes")
                        or duration.get("variableDurationFromMinutes")
                        or 60
                    ),
                    rating=float(reviews.get("combinedAverageRating") or 3.5),
                    price=float(pricing.get("fromPrice") or 0),
                    currency=(product.get("pricing") or {}).get("currency", "USD"),
                    requires_transit=True,
                    booking_url=product.get("productUrl"),
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed Viator product: %s", exc)
    return activities


class ViatorExperienceProvider:
    """Bookable experiences from the Viator partner API."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_results: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._max_results = settings.max_activities if max_results is None else max_results
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.viator_base_url,
            headers={
                "exp-api-key": api_key if api_key is not None else settings.viator_api_key,
                "Accept": "application/json",
            },
            timeout=httpx.Timeout(timeout or settings.enrichment_timeout),
            transport=transport,
        )

    async def search(
        self,
        city: str,
        duration_minutes: int,
        airport: str,
        arrival: datetime,
        weather: WeatherSnapshot,
    ) -> list[Activity]:
        destination = VIATOR_DESTINATION_IDS.get(city)
        if destination is None:
            logger.debug("No Viator destination for %s (%s)", city, airport)
            return []

        body = {
            "filtering": {"destination": str(destination)},
            "sorting": {"sort": "TRAVELER_RATING", "order": "DESCENDING"},
            "pagination": {"start": 1, "count": 50},
            "currency": "USD",
        }
        resp = await self._client.post("/products/search", json=body)
        resp.raise_for_status()
        budget = duration_minutes - CITY_TRIP_OVERHEAD_MINUTES
        activities = [
            a
            for a in parse_viator_products(resp.json().get("products") or [], city)
            if a.duration_minutes <= budget
        ]
        logger.info("Viator returned %d products for %s (%s)", len(activities), city, airport)
        return match_activities(activities, weather, self._max_results)

    async def close(self) -> None:
        await self._client.aclose()

"""Concurrent context enrichment of layover candidates."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, TypeVar

from layover_core.errors import EnrichmentFailure
from layover_core.observability import LoggingErrorSink
from layover_core.schemas import EnrichedLayover
from layover_discovery.config import settings
from layover_discovery.enrichment.airport_profiles import neutral_profile
from layover_discovery.enrichment.transit import stay_in_airport
from layover_discovery.enrichment.weather import fallback_snapshot, for_layover

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from layover_core.observability import ErrorSink
    from layover_core.schemas import (
        Activity,
        LayoverCandidate,
        LayoverPreferences,
        WeatherSnapshot,
    )
    from layover_discovery.enrichment.base import (
        AirportProfileProvider,
        ExperienceProvider,
        TransitProvider,
        WeatherProvider,
    )
    from layover_discovery.enrichment.visa import VisaPolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")

HOTEL_MIN_LAYOVER_MINUTES = 480


class LayoverEnricher:
    """Attaches weather, transit, activities, airport profile and visa context.

    Each lookup runs under its own timeout. A failed or slow lookup is
    reported to the error sink and replaced by its default; it is never
    retried and never fails the candidate.
    """

    def __init__(
        self,
        *,
        weather: WeatherProvider,
        transit: TransitProvider,
        experiences: ExperienceProvider,
        profiles: AirportProfileProvider,
        visa: VisaPolicy,
        timeout: float | None = None,
        error_sink: ErrorSink | None = None,
    ) -> None:
        self._weather = weather
        self._transit = transit
        self._experiences = experiences
        self._profiles = profiles
        self._visa = visa
        self._timeout = settings.enrichment_timeout if timeout is None else timeout
        self._errors = error_sink or LoggingErrorSink(logger)

    async def _lookup(
        self,
        name: str,
        candidate: LayoverCandidate,
        call: Callable[[], Awaitable[T]],
        default: T,
    ) -> T:
        try:
            return await asyncio.wait_for(call(), self._timeout)
        except TimeoutError:
            cause: Exception = TimeoutError(f"no response within {self._timeout:.1f}s")
        except Exception as exc:
            cause = exc

        failure = EnrichmentFailure(name, candidate.airport, cause)
        logger.warning("%s; using default", failure)
        self._errors.record(
            failure,
            {"stage": "enrichment", "lookup": name, "candidate": candidate.id},
        )
        return default

    async def _weather_and_activities(
        self, candidate: LayoverCandidate
    ) -> tuple[WeatherSnapshot, list[Activity]]:
        coords = candidate.coordinates
        if coords is None:
            weather = fallback_snapshot()
        else:
            weather = await self._lookup(
                "weather",
                candidate,
                lambda: self._weather.current_conditions(coords.lat, coords.lng),
                fallback_snapshot(),
            )
        weather = for_layover(weather, candidate.duration_minutes)

        activities = await self._lookup(
            "experiences",
            candidate,
            lambda: self._experiences.search(
                candidate.city,
                candidate.duration_minutes,
                candidate.airport,
                candidate.arrival_time,
                weather,
            ),
            [],
        )
        return weather, activities

    async def enrich(
        self, candidate: LayoverCandidate, constraints: LayoverPreferences
    ) -> EnrichedLayover:
        """Enrich one candidate; never raises for a collaborator failure."""
        (weather, activities), transit, profile = await asyncio.gather(
            self._weather_and_activities(candidate),
            self._lookup(
                "transit",
                candidate,
                lambda: self._transit.analyze(
                    candidate.airport,
                    candidate.duration_minutes,
                    candidate.arrival_time,
                    constraints.has_checked_baggage,
                ),
                stay_in_airport(),
            ),
            self._lookup(
                "airport_profile",
                candidate,
                lambda: self._profiles.profile(candidate.airport),
                neutral_profile(candidate.airport),
            ),
        )

        hotels = (
            profile.hotels
            if candidate.duration_minutes >= HOTEL_MIN_LAYOVER_MINUTES
            else []
        )
        return EnrichedLayover(
            candidate=candidate,
            weather=weather,
            transit=transit,
            amenities=profile.amenities,
            hotels=hotels,
            activities=activities,
            safety=profile.safety,
            visa_requirement=self._visa.requirement(candidate.country),
        )

    async def enrich_all(
        self, candidates: Sequence[LayoverCandidate], constraints: LayoverPreferences
    ) -> list[EnrichedLayover]:
        """Enrich every candidate concurrently, preserving input order."""
        enriched = await asyncio.gather(
            *(self.enrich(c, constraints) for c in candidates)
        )
        logger.info("Enriched %d layover candidates", len(enriched))
        return list(enriched)

    async def close(self) -> None:
        """Release collaborators that hold network clients."""
        for collaborator in (self._weather, self._experiences):
            close = getattr(collaborator, "close", None)
            if close is not None:
                await close()

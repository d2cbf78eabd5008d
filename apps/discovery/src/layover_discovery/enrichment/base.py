"""Collaborator interfaces used by the enrichment stage."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from datetime import datetime

    from layover_core.schemas import (
        Activity,
        AirportProfile,
        TransitAnalysis,
        WeatherSnapshot,
    )


class WeatherProvider(Protocol):
    async def current_conditions(self, lat: float, lng: float) -> WeatherSnapshot: ...


class TransitProvider(Protocol):
    async def analyze(
        self,
        airport: str,
        duration_minutes: int,
        arrival: datetime,
        has_checked_baggage: bool = False,
    ) -> TransitAnalysis: ...


class ExperienceProvider(Protocol):
    async def search(
        self,
        city: str,
        duration_minutes: int,
        airport: str,
        arrival: datetime,
        weather: WeatherSnapshot,
    ) -> list[Activity]: ...


class AirportProfileProvider(Protocol):
    async def profile(self, airport: str) -> AirportProfile: ...

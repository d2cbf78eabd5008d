"""Construct provider adapters by name."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from layover_providers.base import FlightProvider

PROVIDER_NAMES: tuple[str, ...] = ("duffel", "kiwi", "amadeus")


def build_provider(name: str) -> FlightProvider:
    """Build one adapter configured from ``PROVIDER_*`` settings."""
    key = name.lower()
    if key == "duffel":
        from layover_providers.duffel.provider import DuffelProvider

        return DuffelProvider()
    if key == "kiwi":
        from layover_providers.kiwi.provider import KiwiProvider

        return KiwiProvider()
    if key == "amadeus":
        from layover_providers.amadeus_gds.provider import AmadeusProvider

        return AmadeusProvider()
    msg = f"Unknown provider {name!r}; expected one of {', '.join(PROVIDER_NAMES)}"
    raise ValueError(msg)


def build_providers(names: Iterable[str] | None = None) -> list[FlightProvider]:
    """Adapters in registration order (Duffel, Kiwi, Amadeus by default)."""
    return [build_provider(n) for n in (names or PROVIDER_NAMES)]

"""Typed failures raised inside the discovery pipeline."""

from __future__ import annotations


class LayoverError(Exception):
    """Base class for every error raised by the layover packages."""


class ProviderFailure(LayoverError):
    """A flight-data provider could not produce offers for a search."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class ProviderTimeout(ProviderFailure):
    pass


class ProviderAuthError(ProviderFailure):
    """Credentials were missing or rejected; retrying will not help."""


class ProviderResponseError(ProviderFailure):
    """The provider answered, but the payload could not be read."""


class ProviderUnavailable(ProviderFailure):
    """Network failure or 5xx from the provider."""


class EnrichmentFailure(LayoverError):
    """One context lookup failed for one layover candidate."""

    def __init__(self, lookup: str, airport: str, cause: BaseException) -> None:
        super().__init__(f"{lookup} lookup failed for {airport}: {cause!r}")
        self.lookup = lookup
        self.airport = airport
        self.cause = cause


class TotalFailure(LayoverError):
    """Unexpected error in the orchestration itself."""

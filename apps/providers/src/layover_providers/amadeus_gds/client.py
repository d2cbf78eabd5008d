"""Amadeus Self-Service API client wrapper.

Uses the official ``amadeus`` Python SDK which handles OAuth2 token
lifecycle automatically.  Exposes a thin async wrapper around the
synchronous SDK using ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from amadeus import (
    AuthenticationError,
    Client,
    NetworkError,
    ResponseError,
    ServerError,
)

from layover_core.errors import (
    ProviderAuthError,
    ProviderFailure,
    ProviderResponseError,
    ProviderUnavailable,
)
from layover_providers.config import settings

logger = logging.getLogger(__name__)

PROVIDER = "GDS"


def translate_sdk_error(exc: ResponseError) -> ProviderFailure:
    if isinstance(exc, AuthenticationError):
        return ProviderAuthError(PROVIDER, str(exc))
    if isinstance(exc, (NetworkError, ServerError)):
        return ProviderUnavailable(PROVIDER, str(exc))
    return ProviderResponseError(PROVIDER, str(exc))


class AmadeusClient:
    """Async-friendly wrapper around the Amadeus Python SDK."""

    def __init__(
        self,
        *,
        client_id: str | None = None,
        client_secret: str | None = None,
        hostname: str | None = None,
        sdk: Any | None = None,
    ) -> None:
        self._client_id = client_id if client_id is not None else settings.amadeus_client_id
        self._client_secret = (
            client_secret if client_secret is not None else settings.amadeus_client_secret
        )
        self._hostname = hostname or settings.amadeus_hostname
        self._sdk: Any | None = sdk

    @property
    def configured(self) -> bool:
        return self._sdk is not None or bool(self._client_id and self._client_secret)

    def _ensure_sdk(self) -> Any:
        if self._sdk is None:
            if not self.configured:
                raise ProviderAuthError(
                    PROVIDER,
                    "PROVIDER_AMADEUS_CLIENT_ID and PROVIDER_AMADEUS_CLIENT_SECRET "
                    "must be set in environment or .env",
                )
            self._sdk = Client(
                client_id=self._client_id,
                client_secret=self._client_secret,
                hostname=self._hostname,
            )
            logger.info("Amadeus SDK initialised (hostname=%s)", self._hostname)
        return self._sdk

    async def search_flight_offers(self, params: dict[str, Any]) -> dict[str, Any]:
        """Search using GET /v2/shopping/flight-offers.

        Returns the whole response body so the parser can use the
        ``dictionaries`` block for city and carrier names.
        """
        sdk = self._ensure_sdk()

        def _call() -> dict[str, Any]:
            try:
                resp = sdk.shopping.flight_offers_search.get(**params)
            except ResponseError as exc:
                logger.error("Amadeus flight search failed: %s", exc)
                raise translate_sdk_error(exc) from exc
            return resp.result  # type: ignore[no-any-return]

        return await asyncio.to_thread(_call)

    async def health_check(self) -> bool:
        """Verify Amadeus API credentials are valid."""
        if not self.configured:
            return False
        sdk = self._ensure_sdk()

        def _call() -> bool:
            try:
                resp = sdk.reference_data.airlines.get(airlineCodes="QR")
            except ResponseError:
                return False
            return bool(resp.data)

        return await asyncio.to_thread(_call)

    async def close(self) -> None:
        """Drop the SDK handle; it manages its own HTTP lifecycle."""
        self._sdk = None

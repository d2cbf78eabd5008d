"""HTTP client for the Duffel offer request API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from layover_core.errors import ProviderAuthError
from layover_providers.config import settings
from layover_providers.http import read_json, translate_http_error

logger = logging.getLogger(__name__)

PROVIDER = "DUFFEL"


class DuffelClient:
    """Async wrapper around ``POST /air/offer_requests`` with inline offers."""

    def __init__(
        self,
        *,
        access_token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = (
            access_token if access_token is not None else settings.duffel_access_token
        )
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.duffel_base_url,
            headers={
                "Authorization": f"Bearer {self._token}",
                "Duffel-Version": settings.duffel_version,
                "Accept": "application/json",
            },
            timeout=httpx.Timeout(timeout or settings.timeout_seconds),
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self._token)

    async def create_offer_request(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Create an offer request and return its ``data`` object with offers."""
        if not self.configured:
            raise ProviderAuthError(PROVIDER, "PROVIDER_DUFFEL_ACCESS_TOKEN is not set")
        try:
            resp = await self._client.post(
                "/air/offer_requests",
                params={"return_offers": "true"},
                json={"data": payload},
            )
        except httpx.HTTPError as exc:
            raise translate_http_error(PROVIDER, exc) from exc
        body = read_json(PROVIDER, resp)
        data = body.get("data")
        logger.debug(
            "Duffel offer request %s returned %d offers",
            data.get("id") if isinstance(data, dict) else None,
            len(data.get("offers", [])) if isinstance(data, dict) else 0,
        )
        return data if isinstance(data, dict) else {}

    async def list_airlines(self, limit: int = 1) -> dict[str, Any]:
        """Cheap authenticated call used for health checks."""
        try:
            resp = await self._client.get("/air/airlines", params={"limit": limit})
        except httpx.HTTPError as exc:
            raise translate_http_error(PROVIDER, exc) from exc
        return read_json(PROVIDER, resp)

    async def close(self) -> None:
        """Shut down the underlying HTTPX client."""
        await self._client.aclose()

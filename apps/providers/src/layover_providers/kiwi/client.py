"""HTTP client for the Kiwi Tequila search API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from layover_core.errors import ProviderAuthError
from layover_providers.config import settings
from layover_providers.http import read_json, translate_http_error

logger = logging.getLogger(__name__)

PROVIDER = "KIWI_API"


class KiwiClient:
    """Thin async wrapper around the Kiwi Tequila ``/v2/search`` endpoint."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.kiwi_api_key
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.kiwi_base_url,
            headers={"apikey": self._api_key},
            timeout=httpx.Timeout(timeout or settings.timeout_seconds),
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def search_flights(self, params: dict[str, Any]) -> dict[str, Any]:
        """Call ``GET /v2/search`` and return the parsed JSON body."""
        if not self.configured:
            raise ProviderAuthError(PROVIDER, "PROVIDER_KIWI_API_KEY is not set")
        try:
            resp = await self._client.get("/v2/search", params=params)
        except httpx.HTTPError as exc:
            raise translate_http_error(PROVIDER, exc) from exc
        data = read_json(PROVIDER, resp)
        logger.debug("Kiwi search returned %d results", len(data.get("data", [])))
        return data

    async def close(self) -> None:
        """Shut down the underlying HTTPX client."""
        await self._client.aclose()

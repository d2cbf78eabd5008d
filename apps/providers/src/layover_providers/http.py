"""Shared helpers for the HTTP-based provider clients."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from layover_core.errors import (
    ProviderAuthError,
    ProviderFailure,
    ProviderResponseError,
    ProviderTimeout,
    ProviderUnavailable,
)

logger = logging.getLogger(__name__)


def translate_http_error(provider: str, exc: httpx.HTTPError) -> ProviderFailure:
    """Map an httpx error onto the provider failure taxonomy."""
    if isinstance(exc, httpx.TimeoutException):
        return ProviderTimeout(provider, f"request timed out: {exc}")
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status in (401, 403):
            return ProviderAuthError(provider, f"credentials rejected (HTTP {status})")
        if status == 429 or status >= 500:
            return ProviderUnavailable(provider, f"HTTP {status}")
        return ProviderResponseError(provider, f"HTTP {status}: {exc.response.text[:200]}")
    return ProviderUnavailable(provider, f"transport error: {exc}")


def read_json(provider: str, response: httpx.Response) -> dict[str, Any]:
    """Raise for status and decode a JSON object body."""
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise translate_http_error(provider, exc) from exc
    try:
        data = response.json()
    except ValueError as exc:
        raise ProviderResponseError(provider, "response body is not JSON") from exc
    if not isinstance(data, dict):
        raise ProviderResponseError(provider, "response body is not a JSON object")
    return data

"""Concurrent fan-out to every flight provider with failure isolation."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict

from layover_core.errors import ProviderAuthError, ProviderFailure, ProviderTimeout
from layover_core.observability import LoggingErrorSink
from layover_core.schemas import (
    AggregatedResults,
    DataSource,
    DedupPolicy,
    Offer,
    ProviderErrorInfo,
    SearchRequest,
)
from layover_providers.config import settings
from layover_providers.pipeline.merger import default_dedup_key, merge_offers
from layover_providers.retry import async_retry

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from layover_core.observability import ErrorSink
    from layover_providers.base import FlightProvider

logger = logging.getLogger(__name__)


class ProviderHealth(BaseModel):
    model_config = ConfigDict(frozen=True)

    provider: DataSource
    status: Literal["healthy", "degraded", "down"]
    response_time_ms: int
    error: str | None = None


class ProviderAggregator:
    """Runs one search per provider concurrently and merges the results.

    Each provider call gets its own timeout and a bounded number of
    attempts. A failing provider contributes zero offers and a
    :class:`ProviderErrorInfo`; ``search_all`` itself never raises.
    """

    def __init__(
        self,
        providers: Sequence[FlightProvider],
        *,
        timeout: float | None = None,
        retry_attempts: int | None = None,
        retry_base_delay: float | None = None,
        retry_max_delay: float | None = None,
        dedup_policy: DedupPolicy = DedupPolicy.LOWEST_PRICE,
        dedup_key: Callable[[Offer], str] = default_dedup_key,
        error_sink: ErrorSink | None = None,
        degraded_after_ms: int | None = None,
    ) -> None:
        self._providers = list(providers)
        self._timeout = settings.timeout_seconds if timeout is None else timeout
        attempts = settings.retry_attempts if retry_attempts is None else retry_attempts
        self._attempts = max(attempts, 1)
        self._base_delay = (
            settings.retry_base_delay if retry_base_delay is None else retry_base_delay
        )
        self._max_delay = (
            settings.retry_max_delay if retry_max_delay is None else retry_max_delay
        )
        self._policy = dedup_policy
        self._key = dedup_key
        self._errors = error_sink or LoggingErrorSink(logger)
        self._degraded_after_ms = (
            settings.degraded_after_ms if degraded_after_ms is None else degraded_after_ms
        )

    @property
    def providers(self) -> list[FlightProvider]:
        return list(self._providers)

    async def search_all(self, request: SearchRequest) -> AggregatedResults:
        """Search every provider and return merged, deduplicated offers."""
        start = time.monotonic()
        slots: list[list[Offer]] = [[] for _ in self._providers]
        failures: list[ProviderErrorInfo | None] = [None] * len(self._providers)

        async def _run(index: int, provider: FlightProvider) -> None:
            try:
                slots[index] = await self._search_one(provider, request)
            except Exception as exc:
                failures[index] = self._record_failure(provider, exc, request)

        await asyncio.gather(
            *(_run(i, p) for i, p in enumerate(self._providers))
        )

        counts: dict[DataSource, int] = {}
        for provider, offers in zip(self._providers, slots, strict=True):
            counts[provider.source] = counts.get(provider.source, 0) + len(offers)

        merged = merge_offers(slots, self._policy, self._key)
        elapsed_ms = int((time.monotonic() - start) * 1000)
        errors = [f for f in failures if f is not None]

        logger.info(
            "Aggregated %d unique offers for %s-%s from %d provider(s), %d failed (%dms)",
            len(merged),
            request.origin,
            request.destination,
            len(self._providers),
            len(errors),
            elapsed_ms,
        )
        return AggregatedResults(
            offers=merged,
            provider_counts=counts,
            provider_errors=errors,
            providers_queried=len(self._providers),
            search_time_ms=elapsed_ms,
        )

    async def _search_one(
        self, provider: FlightProvider, request: SearchRequest
    ) -> list[Offer]:
        timeout = self._timeout

        @async_retry(
            max_retries=self._attempts - 1,
            base_delay=self._base_delay,
            max_delay=self._max_delay,
            exceptions=(ProviderFailure,),
            give_up_on=(ProviderAuthError,),
        )
        async def _attempt() -> list[Offer]:
            try:
                return await asyncio.wait_for(provider.search(request), timeout)
            except TimeoutError as exc:
                raise ProviderTimeout(
                    provider.name, f"no response within {timeout:.1f}s"
                ) from exc

        return await _attempt()

    def _record_failure(
        self, provider: FlightProvider, exc: Exception, request: SearchRequest
    ) -> ProviderErrorInfo:
        if isinstance(exc, ProviderFailure):
            logger.warning("Provider %s failed: %s", provider.name, exc)
        else:
            logger.exception("Provider %s raised unexpectedly", provider.name)
        self._errors.record(
            exc,
            {
                "stage": "aggregation",
                "provider": provider.name,
                "origin": request.origin,
                "destination": request.destination,
            },
        )
        return ProviderErrorInfo(
            provider=provider.source,
            error_type=type(exc).__name__,
            message=str(exc),
        )

    async def health_status(self) -> list[ProviderHealth]:
        """Check every provider concurrently."""

        async def _check(provider: FlightProvider) -> ProviderHealth:
            start = time.monotonic()
            error: str | None = None
            try:
                ok = await asyncio.wait_for(provider.health_check(), self._timeout)
            except TimeoutError:
                ok, error = False, f"no response within {self._timeout:.1f}s"
            except Exception as exc:
                logger.exception("Health check for %s failed", provider.name)
                ok, error = False, str(exc)
            elapsed_ms = int((time.monotonic() - start) * 1000)

            if not ok:
                status = "down"
            elif elapsed_ms > self._degraded_after_ms:
                status = "degraded"
            else:
                status = "healthy"
            return ProviderHealth(
                provider=provider.source,
                status=status,
                response_time_ms=elapsed_ms,
                error=error,
            )

        return list(await asyncio.gather(*(_check(p) for p in self._providers)))

    async def close(self) -> None:
        """Close every provider; one failing close does not stop the others."""
        results = await asyncio.gather(
            *(p.close() for p in self._providers), return_exceptions=True
        )
        for provider, result in zip(self._providers, results, strict=True):
            if isinstance(result, Exception):
                logger.error("Closing %s failed: %s", provider.name, result)

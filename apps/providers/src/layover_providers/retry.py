"""Exponential backoff retry decorator for async functions."""

from __future__ import annotations

import asyncio
import functools
import logging
import random
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

T = TypeVar("T")

logger = logging.getLogger(__name__)


def backoff_delay(
    attempt: int, base_delay: float, max_delay: float, *, jitter: bool = True
) -> float:
    delay = min(base_delay * (2**attempt), max_delay)
    if jitter:
        delay *= 0.5 + random.random()
    return delay


def async_retry(
    max_retries: int = 1,
    base_delay: float = 0.5,
    max_delay: float = 4.0,
    jitter: bool = True,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    give_up_on: tuple[type[Exception], ...] = (),
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator that retries async functions with exponential backoff + jitter.

    ``max_retries`` counts retries after the first call. Exceptions listed in
    ``give_up_on`` propagate immediately even when they also match
    ``exceptions``.
    """

    def decorator(
        func: Callable[..., Awaitable[T]],
    ) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: object, **kwargs: object) -> T:
            last_exc: Exception | None = None
            for attempt in range(max_retries + 1):
                try:
                    return await func(*args, **kwargs)
                except give_up_on:
                    raise
                except exceptions as exc:
                    last_exc = exc
                    if attempt == max_retries:
                        break
                    delay = backoff_delay(attempt, base_delay, max_delay, jitter=jitter)
                    logger.warning(
                        "Retry %d/%d for %s after %.1fs: %s",
                        attempt + 1,
                        max_retries,
                        getattr(func, "__name__", repr(func)),
                        delay,
                        exc,
                    )
                    await asyncio.sleep(delay)
            raise last_exc  # type: ignore[misc]

        return wrapper

    return decorator

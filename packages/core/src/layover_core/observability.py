"""Fire-and-forget error reporting hook shared by the pipeline stages."""

from __future__ import annotations

import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class ErrorSink(Protocol):
    """Receives recovered errors. Must not raise and must not block."""

    def record(self, error: BaseException, context: dict[str, Any]) -> None: ...


class LoggingErrorSink:
    """Default sink: one warning line per recovered error."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def record(self, error: BaseException, context: dict[str, Any]) -> None:
        self._log.warning(
            "Recovered %s: %s | context=%s", type(error).__name__, error, context
        )


class CollectingErrorSink:
    """Keeps every recorded error in memory; used by the CLI summary and tests."""

    def __init__(self) -> None:
        self.records: list[tuple[BaseException, dict[str, Any]]] = []

    def record(self, error: BaseException, context: dict[str, Any]) -> None:
        self.records.append((error, dict(context)))

"""
Pluggable timing hooks for scans. The tracker only opens spans; whether anything
is measured or logged is up to the injected implementation.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext
from typing import Protocol

from contentscan.content_paths.defaults import DEBUG_ENV_VAR

log = logging.getLogger(__name__)

_FALSY_DEBUG_VALUES = frozenset({"", "0", "false", "-"})


class Instrumentation(Protocol):
    def span(self, name: str) -> AbstractContextManager[None]:
        """Context manager that marks the start and end of a named step."""
        ...


class NullInstrumentation:
    """Does nothing. The default."""

    def span(self, name: str) -> AbstractContextManager[None]:
        return nullcontext()


class LoggingInstrumentation:
    """Logs the duration of each span at DEBUG level."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger: logging.Logger = logger or log

    @contextmanager
    def _timed(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self._logger.debug("%s: %.3fms", name, elapsed_ms)

    def span(self, name: str) -> AbstractContextManager[None]:
        return self._timed(name)


def debug_enabled(environ: dict[str, str] | None = None) -> bool:
    value = (os.environ if environ is None else environ).get(DEBUG_ENV_VAR, "")
    return value.strip().lower() not in _FALSY_DEBUG_VALUES


def instrumentation_from_env(environ: dict[str, str] | None = None) -> Instrumentation:
    """`LoggingInstrumentation` when `DEBUG` is set to something truthy, else a no-op."""
    if debug_enabled(environ):
        return LoggingInstrumentation()
    return NullInstrumentation()

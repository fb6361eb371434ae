"""Route metric calls to the primary backend with a secondary fallback."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, TypeVar

from .backends import PRIMARY_NAME, MetricKind, record_primary, resolve_fallback
from .core.clock import elapsed_ms, now_mono_ns
from .core.config import MetricsConfiguration
from .tags import TagSet, to_mapping, to_sequence

__all__ = ["COMPONENT_NAME", "MetricRouter"]

log = logging.getLogger(__name__)

COMPONENT_NAME = "MetricsFallback"

N = TypeVar("N", int, float)


class MetricRouter:
    """Dispatch counters and histogram recordings for one configuration.

    Every operation returns the value it was given, whichever backend handled
    the call.  Primary backend errors are logged to the configured error sink
    and never reach the caller; errors raised by the fallback backend do.
    """

    def __init__(self, configuration: MetricsConfiguration) -> None:
        self._configuration = configuration

    @property
    def configuration(self) -> MetricsConfiguration:
        return self._configuration

    def increment(self, name: str, tags: TagSet | None = None, amount: N = 1) -> N:
        """Add *amount* to the counter *name*."""

        return self._dispatch(MetricKind.COUNTER, name, amount, tags)

    def timing(self, name: str, value: N, tags: TagSet | None = None) -> N:
        """Record a duration (milliseconds by convention) for *name*."""

        return self._dispatch(MetricKind.TIMING, name, value, tags)

    def histogram(self, name: str, value: N, tags: TagSet | None = None) -> N:
        """Record *value* in the histogram *name*."""

        return self._dispatch(MetricKind.HISTOGRAM, name, value, tags)

    @contextmanager
    def timed(self, name: str, tags: TagSet | None = None) -> Iterator[None]:
        """Emit the wall time spent in the ``with`` block as a timing metric."""

        start_ns = now_mono_ns()
        try:
            yield
        finally:
            self.timing(name, elapsed_ms(start_ns), tags)

    def _dispatch(self, kind: MetricKind, name: str, value: N, tags: TagSet | None) -> N:
        configuration = self._configuration
        if configuration.is_primary_enabled():
            outcome = record_primary(
                configuration.primary_client, kind, name, value, to_mapping(tags)
            )
            if outcome.ok:
                return value
            self._log_error(f"{PRIMARY_NAME} error for {kind.describe(name)}: {outcome.error}")
            self._log_error("Falling back to configured fallback")
        return self._fallback(kind, name, value, tags)

    def _fallback(self, kind: MetricKind, name: str, value: N, tags: TagSet | None) -> N:
        sink = resolve_fallback(self._configuration.fallback_client)
        if sink is None:
            if log.isEnabledFor(logging.DEBUG):
                log.debug("metric dropped kind=%s name=%s value=%s", kind.name, name, value)
            return value
        converted = to_sequence(tags)
        if kind is MetricKind.COUNTER:
            sink.increment(name, by=value, tags=converted)
        elif kind is MetricKind.TIMING:
            sink.timing(name, value, tags=converted)
        else:
            sink.histogram(name, value, tags=converted)
        return value

    def _log_error(self, message: str) -> None:
        self._configuration.error_sink.error(f"{COMPONENT_NAME}: {message}")

"""Adapters around the primary and fallback metrics backends."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Protocol, Sequence

from datadog import DogStatsd
from opentelemetry import metrics as otel_metrics

__all__ = [
    "PRIMARY_NAME",
    "DogStatsdSink",
    "ErrorSink",
    "FallbackMetricsSink",
    "MetricKind",
    "PrimaryBackend",
    "RecordOutcome",
    "meter_from_provider",
    "record_primary",
    "resolve_fallback",
]

log = logging.getLogger(__name__)

PRIMARY_NAME = "OpenTelemetry"


class MetricKind(Enum):
    """Kind of metric emitted; the value is the wording used in error lines."""

    COUNTER = ""
    TIMING = "timing"
    HISTOGRAM = "histogram"

    def describe(self, name: str) -> str:
        if self.value:
            return f"{self.value} metric '{name}'"
        return f"metric '{name}'"


class ErrorSink(Protocol):
    """Anything able to receive error lines; :class:`logging.Logger` qualifies."""

    def error(self, msg: str, *args: Any, **kwargs: Any) -> Any: ...


class PrimaryBackend(Protocol):
    """Protocol describing the subset of an OpenTelemetry ``Meter`` in use."""

    def create_counter(self, name: str, *args: Any, **kwargs: Any) -> Any: ...

    def create_histogram(self, name: str, *args: Any, **kwargs: Any) -> Any: ...


class FallbackMetricsSink(ABC):
    """Capability interface for secondary backends taking ``key:value`` tags.

    Subclass it, or call :meth:`FallbackMetricsSink.register`, to have a client
    recognised as a fallback.
    """

    @abstractmethod
    def increment(self, name: str, by: float = 1, tags: Sequence[str] = ()) -> Any:
        """Add *by* to the counter *name*."""

    @abstractmethod
    def timing(self, name: str, value: float, tags: Sequence[str] = ()) -> Any:
        """Record a duration for *name*."""

    @abstractmethod
    def histogram(self, name: str, value: float, tags: Sequence[str] = ()) -> Any:
        """Record *value* in the histogram *name*."""


@dataclass(frozen=True, slots=True)
class RecordOutcome:
    """Result of a single attempt against the primary backend."""

    ok: bool
    error: Optional[str] = None

    @classmethod
    def success(cls) -> "RecordOutcome":
        return cls(ok=True)

    @classmethod
    def failure(cls, message: str) -> "RecordOutcome":
        return cls(ok=False, error=message)


def meter_from_provider(name: str, version: Optional[str] = None) -> PrimaryBackend:
    """Return a meter from the globally registered OpenTelemetry provider."""

    return otel_metrics.get_meter_provider().get_meter(name, version)


def record_primary(
    client: Optional[PrimaryBackend],
    kind: MetricKind,
    name: str,
    value: float,
    attributes: Mapping[str, Any],
) -> RecordOutcome:
    """Create or fetch the instrument for *name* and record *value* on it."""

    if client is None:
        return RecordOutcome.failure(f"{PRIMARY_NAME} meter not configured")
    try:
        if kind is MetricKind.COUNTER:
            client.create_counter(name).add(value, attributes=attributes)
        else:
            client.create_histogram(name).record(value, attributes=attributes)
    except Exception as exc:
        return RecordOutcome.failure(str(exc))
    return RecordOutcome.success()


class DogStatsdSink(FallbackMetricsSink):
    """Expose a :class:`datadog.DogStatsd` client as a :class:`FallbackMetricsSink`."""

    def __init__(self, statsd: DogStatsd) -> None:
        self._statsd = statsd

    @property
    def statsd(self) -> DogStatsd:
        return self._statsd

    def increment(self, name: str, by: float = 1, tags: Sequence[str] = ()) -> None:
        self._statsd.increment(name, value=by, tags=list(tags))

    def timing(self, name: str, value: float, tags: Sequence[str] = ()) -> None:
        self._statsd.timing(name, value, tags=list(tags))

    def histogram(self, name: str, value: float, tags: Sequence[str] = ()) -> None:
        self._statsd.histogram(name, value, tags=list(tags))


def resolve_fallback(client: Any) -> Optional[FallbackMetricsSink]:
    """Return a sink for *client* or ``None`` when it is not a recognised backend."""

    if client is None:
        return None
    if isinstance(client, DogStatsd):
        return DogStatsdSink(client)
    if isinstance(client, FallbackMetricsSink):
        return client
    log.debug("ignoring unrecognised fallback client type=%s", type(client).__name__)
    return None

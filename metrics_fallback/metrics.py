"""Process-wide metrics façade.

Most applications configure metrics once at start-up and then emit from
anywhere::

    from metrics_fallback import metrics

    metrics.configure_from_environment(statsd=DogStatsd())
    metrics.increment("user.created", tags={"source": "api"})

Code that prefers explicit wiring can build its own
:class:`~metrics_fallback.router.MetricRouter` instead.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ContextManager, Optional, TypeVar

from .backends import ErrorSink, meter_from_provider
from .core.config import ConfigurationHolder, MetricsConfiguration, primary_enabled_from_env
from .router import MetricRouter
from .tags import TagSet

__all__ = [
    "configuration",
    "configure",
    "configure_from_environment",
    "histogram",
    "increment",
    "reset_configuration",
    "router",
    "timed",
    "timing",
]

log = logging.getLogger(__name__)

N = TypeVar("N", int, float)

DEFAULT_METER_NAME = "primary_health"

_holder = ConfigurationHolder()


def configuration() -> MetricsConfiguration:
    """Return the live process-wide configuration."""

    return _holder.current


def configure(
    mutator: Optional[Callable[[MetricsConfiguration], object]] = None,
) -> MetricsConfiguration:
    """Mutate the process-wide configuration in place."""

    return _holder.configure(mutator)


def reset_configuration() -> MetricsConfiguration:
    """Discard the current configuration and install a default one."""

    return _holder.reset()


def configure_from_environment(
    *,
    meter_name: str = DEFAULT_METER_NAME,
    statsd: Any = None,
    error_sink: Optional[ErrorSink] = None,
) -> MetricsConfiguration:
    """Bootstrap the façade from :envvar:`OPENTELEMETRY_ENABLED`.

    When the flag is set a meter named *meter_name* is taken from the global
    OpenTelemetry provider.  *statsd* becomes the fallback client and
    *error_sink* replaces the default logger when given.
    """

    def _apply(config: MetricsConfiguration) -> None:
        config.primary_enabled = primary_enabled_from_env()
        if config.primary_enabled:
            config.primary_client = meter_from_provider(meter_name)
        if statsd is not None:
            config.fallback_client = statsd
        if error_sink is not None:
            config.error_sink = error_sink

    configured = _holder.configure(_apply)
    log.info(
        "metrics configured primary_enabled=%s fallback=%s",
        configured.primary_enabled,
        type(configured.fallback_client).__name__ if configured.fallback_client else None,
    )
    return configured


def router() -> MetricRouter:
    """Return a router bound to the configuration live at call time."""

    return MetricRouter(_holder.current)


def increment(name: str, tags: TagSet | None = None, amount: N = 1) -> N:
    """Increment a counter."""

    return router().increment(name, tags, amount)


def timing(name: str, value: N, tags: TagSet | None = None) -> N:
    """Record a timing observation."""

    return router().timing(name, value, tags)


def histogram(name: str, value: N, tags: TagSet | None = None) -> N:
    """Record a histogram observation."""

    return router().histogram(name, value, tags)


def timed(name: str, tags: TagSet | None = None) -> ContextManager[None]:
    """Time the enclosed block and emit it through :func:`timing`."""

    return router().timed(name, tags)

"""Centralised metrics configuration with environment overrides."""

from __future__ import annotations

import logging
import os
import threading
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..backends import ErrorSink, PrimaryBackend

log = logging.getLogger(__name__)

__all__ = [
    "OPENTELEMETRY_ENABLED_ENV",
    "ConfigurationHolder",
    "MetricsConfiguration",
    "primary_enabled_from_env",
]

OPENTELEMETRY_ENABLED_ENV = "OPENTELEMETRY_ENABLED"


def _get_env_flag(name: str, default: str = "false") -> bool:
    value = os.getenv(name, default)
    if value not in {"true", "false"}:
        log.debug("Treating %s=%r as disabled", name, value)
    return value == "true"


def primary_enabled_from_env() -> bool:
    """Return ``True`` only when :envvar:`OPENTELEMETRY_ENABLED` is exactly ``"true"``."""

    return _get_env_flag(OPENTELEMETRY_ENABLED_ENV)


class MetricsConfiguration:
    """Settings consulted by :class:`~metrics_fallback.router.MetricRouter`.

    No validation happens here: an enabled primary backend without a client is
    a legal configuration and is reported when a metric is emitted.
    """

    def __init__(
        self,
        *,
        primary_enabled: Optional[bool] = None,
        primary_client: Optional["PrimaryBackend"] = None,
        fallback_client: Any = None,
        error_sink: Optional["ErrorSink"] = None,
    ) -> None:
        if primary_enabled is None:
            primary_enabled = primary_enabled_from_env()
        self.primary_enabled = primary_enabled
        self.primary_client = primary_client
        self.fallback_client = fallback_client
        self._error_sink = error_sink

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(primary_enabled={self.primary_enabled!r}, "
            f"primary_client={self.primary_client!r}, "
            f"fallback_client={self.fallback_client!r})"
        )

    def is_primary_enabled(self) -> bool:
        return bool(self.primary_enabled)

    def is_fallback_configured(self) -> bool:
        return self.fallback_client is not None

    @property
    def error_sink(self) -> "ErrorSink":
        """Sink receiving primary backend failures.

        Resolved on first read when none was set explicitly and remembered
        afterwards.
        """

        if self._error_sink is None:
            from .logging import default_error_sink

            self._error_sink = default_error_sink()
        return self._error_sink

    @error_sink.setter
    def error_sink(self, sink: Optional["ErrorSink"]) -> None:
        self._error_sink = sink


class ConfigurationHolder:
    """Own the live :class:`MetricsConfiguration` and serialise writers."""

    def __init__(self, configuration: Optional[MetricsConfiguration] = None) -> None:
        self._lock = threading.Lock()
        if configuration is None:
            configuration = MetricsConfiguration()
        self._configuration = configuration

    @property
    def current(self) -> MetricsConfiguration:
        return self._configuration

    def configure(
        self, mutator: Optional[Callable[[MetricsConfiguration], object]] = None
    ) -> MetricsConfiguration:
        """Run *mutator* against the live configuration while holding the lock."""

        with self._lock:
            configuration = self._configuration
            if mutator is not None:
                mutator(configuration)
            return configuration

    def reset(self) -> MetricsConfiguration:
        """Replace the live configuration with a fresh default instance."""

        with self._lock:
            self._configuration = MetricsConfiguration()
            log.debug(
                "metrics configuration reset primary_enabled=%s",
                self._configuration.primary_enabled,
            )
            return self._configuration

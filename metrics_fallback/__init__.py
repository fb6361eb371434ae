"""Emit metrics to OpenTelemetry with a StatsD fallback."""

from .backends import DogStatsdSink, FallbackMetricsSink, MetricKind, RecordOutcome
from .core.config import ConfigurationHolder, MetricsConfiguration
from .metrics import (
    configuration,
    configure,
    configure_from_environment,
    histogram,
    increment,
    reset_configuration,
    timed,
    timing,
)
from .router import MetricRouter

__all__ = [
    "ConfigurationHolder",
    "DogStatsdSink",
    "FallbackMetricsSink",
    "MetricKind",
    "MetricRouter",
    "MetricsConfiguration",
    "RecordOutcome",
    "configuration",
    "configure",
    "configure_from_environment",
    "histogram",
    "increment",
    "reset_configuration",
    "timed",
    "timing",
]

"""Helpers for putting the process-wide façade into a known state in tests."""

from __future__ import annotations

from typing import Any

from . import metrics
from .core.config import MetricsConfiguration
from .core.logging import PACKAGE_LOGGER, get_logger

__all__ = ["configure_for_tests", "configure_with_fallback"]


def configure_for_tests() -> MetricsConfiguration:
    """Reset the façade: primary disabled, no fallback, package logger as sink."""

    metrics.reset_configuration()

    def _apply(config: MetricsConfiguration) -> None:
        config.primary_enabled = False
        config.fallback_client = None
        config.error_sink = get_logger(PACKAGE_LOGGER)

    return metrics.configure(_apply)


def configure_with_fallback(fallback: Any) -> MetricsConfiguration:
    """Route every call straight to *fallback*."""

    def _apply(config: MetricsConfiguration) -> None:
        config.primary_enabled = False
        config.fallback_client = fallback

    return metrics.configure(_apply)

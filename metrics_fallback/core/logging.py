"""Logging helpers for the metrics fallback package.

Applications embedding the package usually own logging already; in that case
the error sink simply reuses a named logger that propagates into the host's
handlers.  Standalone scripts get a stdout handler with a key=value format so
that backend failures are still visible.  Callers may also invoke
:func:`configure_logging` once during start-up.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Iterable

__all__ = ["PACKAGE_LOGGER", "configure_logging", "default_error_sink", "get_logger"]

PACKAGE_LOGGER = "metrics_fallback"


class _StructuredFormatter(logging.Formatter):
    """Formatter that renders log records in a key=value style."""

    default_time_format = "%Y-%m-%dT%H:%M:%S"
    default_msec_format = "%s.%03d"

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        if self.usesTime():
            record.asctime = self.formatTime(record, self.datefmt)
        parts = [
            f"level={record.levelname}",
            f"logger={record.name}",
        ]
        if record.message:
            parts.append(f"msg={record.message}")
        if record.exc_info:
            parts.append(self.formatException(record.exc_info))
        return " ".join(parts)


def _resolve_level(default_level: int) -> int:
    verbose = os.getenv("LOG_VERBOSE")
    if verbose in {"1", "true", "TRUE", "yes", "on"}:
        return logging.DEBUG
    return default_level


def configure_logging(
    *,
    default_level: int = logging.INFO,
    structured: bool = True,
    extra_loggers: Iterable[str] | None = None,
) -> None:
    """Configure the root logging handler if none is installed.

    Parameters
    ----------
    default_level:
        Logging level used when ``LOG_VERBOSE`` is not enabled.
    structured:
        When :class:`True`, attach a key=value formatter for easy parsing.
    extra_loggers:
        Optional collection of logger names that should inherit the configured
        level, e.g. ``opentelemetry`` or ``datadog``.
    """

    level = _resolve_level(default_level)
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
    else:
        handler = logging.StreamHandler()
        if structured:
            handler.setFormatter(_StructuredFormatter())
        else:
            handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
        root.addHandler(handler)
        root.setLevel(level)

    for name in extra_loggers or ():
        logging.getLogger(name).setLevel(level)

    logging.captureWarnings(True)


def get_logger(name: str) -> logging.Logger:
    """Return a logger using the shared configuration."""

    return logging.getLogger(name)


def _host_logging_configured() -> bool:
    return bool(logging.getLogger().handlers)


def default_error_sink() -> logging.Logger:
    """Return the logger used when no error sink was configured.

    When the host application has configured logging (the root logger has
    handlers) the package logger is returned untouched so records flow into
    the host's handlers.  Otherwise a stdout handler is attached once.
    """

    logger = get_logger(PACKAGE_LOGGER)
    if _host_logging_configured() or logger.handlers:
        return logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_StructuredFormatter())
    logger.addHandler(handler)
    logger.setLevel(_resolve_level(logging.INFO))
    return logger

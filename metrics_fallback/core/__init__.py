"""Core infrastructure for the metrics fallback router."""

__all__ = [
    "clock",
    "config",
    "logging",
]

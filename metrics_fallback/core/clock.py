"""Clock utilities for timing metrics."""

import time


def now_mono_ns() -> int:
    """Local monotonic clock for durations."""

    return time.monotonic_ns()


def elapsed_ms(start_ns: int) -> float:
    """Milliseconds elapsed since *start_ns* taken from :func:`now_mono_ns`."""

    return (now_mono_ns() - start_ns) / 1_000_000

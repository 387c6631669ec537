"""Wall-clock stopwatch for profiling.

A Timer starts measuring when created and reports the elapsed time in
nanoseconds. It is used to profile calls into the integrator.
"""

from __future__ import annotations

import time

_UNITS = (
    (3_600_000_000_000, "h"),
    (60_000_000_000, "min"),
    (1_000_000_000, "s"),
    (1_000_000, "ms"),
    (1_000, "us"),
)


def ns_time(nanoseconds: int) -> str:
    """Format a duration in nanoseconds using the largest fitting unit.

    Example:
        >>> ns_time(1_500_000)
        '1.500 [ms]'
        >>> ns_time(12)
        '12 [ns]'
    """
    magnitude = abs(nanoseconds)
    for scale, unit in _UNITS:
        if magnitude >= scale:
            return f"{nanoseconds / scale:.3f} [{unit}]"
    return f"{nanoseconds} [ns]"


class Timer:
    """Stopwatch that starts when created.

    Can also be used as a context manager, in which case ``elapsed_ns``
    holds the duration of the block after it exits.
    """

    def __init__(self) -> None:
        self._t0 = time.perf_counter_ns()
        self.elapsed_ns: int | None = None

    def get(self) -> int:
        """Nanoseconds elapsed since the timer was created."""
        return time.perf_counter_ns() - self._t0

    def __enter__(self) -> Timer:
        self._t0 = time.perf_counter_ns()
        self.elapsed_ns = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed_ns = self.get()

    def __str__(self) -> str:
        return ns_time(self.get())

    def __repr__(self) -> str:
        return f"Timer(elapsed={self})"

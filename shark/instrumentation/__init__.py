"""Profiling helpers: stopwatch and per-call integration samples."""

from shark.instrumentation.profile import IntegrationProfiler, IntegrationSample
from shark.instrumentation.timer import Timer, ns_time

__all__ = [
    "IntegrationProfiler",
    "IntegrationSample",
    "Timer",
    "ns_time",
]

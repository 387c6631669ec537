"""Per-call profiling of integrator work.

IntegrationProfiler wraps an Integrator and records, for every call, the
bounds, the result, the number of intervals used and the elapsed wall
time. The interval count is the calibration signal the rest of the
simulation consumes; the samples can be exported to a pandas DataFrame for
analysis.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any

import pandas as pd

from shark.instrumentation.timer import Timer
from shark.numerics.errors import IntegrationError
from shark.numerics.integrator import Integrator
from shark.numerics.rules import Integrand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntegrationSample:
    """One profiled integrate() call."""

    a: float
    b: float
    value: float
    abserr: float
    intervals: int
    elapsed_ns: int
    ok: bool
    error: str = ""


class IntegrationProfiler:
    """Times integrate() calls on a wrapped Integrator.

    Failed calls are recorded with ``ok=False`` and the exception is
    re-raised unchanged.

    Args:
        integrator: The integrator to profile. Its interval counter keeps
            counting as usual.
    """

    COLUMNS = ["a", "b", "value", "abserr", "intervals", "elapsed_ns", "ok", "error"]

    def __init__(self, integrator: Integrator) -> None:
        self.integrator = integrator
        self._samples: list[IntegrationSample] = []

    def integrate(
        self,
        f: Integrand,
        params: Any,
        a: float,
        b: float,
        epsabs: float,
        epsrel: float,
    ) -> float:
        """Forward to ``Integrator.integrate`` and record a sample."""
        timer = Timer()
        try:
            result = self.integrator.integrate_with_error(f, params, a, b, epsabs, epsrel)
        except IntegrationError as exc:
            self._samples.append(
                IntegrationSample(
                    a=a,
                    b=b,
                    value=exc.result,
                    abserr=exc.abserr,
                    intervals=exc.intervals,
                    elapsed_ns=timer.get(),
                    ok=False,
                    error=type(exc).__name__,
                )
            )
            raise

        elapsed = timer.get()
        self._samples.append(
            IntegrationSample(
                a=a,
                b=b,
                value=result.value,
                abserr=result.abserr,
                intervals=result.intervals,
                elapsed_ns=elapsed,
                ok=True,
            )
        )
        logger.debug("Profiled integration over [%g, %g]: %d intervals in %d ns", a, b, result.intervals, elapsed)
        return result.value

    @property
    def samples(self) -> list[IntegrationSample]:
        return self._samples

    @property
    def total_intervals(self) -> int:
        return sum(s.intervals for s in self._samples)

    @property
    def total_elapsed_ns(self) -> int:
        return sum(s.elapsed_ns for s in self._samples)

    def mean_elapsed_ns_per_interval(self) -> float:
        """Average wall time per interval over all samples, nan if nothing ran."""
        intervals = self.total_intervals
        if intervals == 0:
            return math.nan
        return self.total_elapsed_ns / intervals

    def clear(self) -> None:
        self._samples.clear()

    def to_dataframe(self) -> pd.DataFrame:
        """Samples as a DataFrame, one row per call."""
        if not self._samples:
            return pd.DataFrame(columns=self.COLUMNS)
        return pd.DataFrame([asdict(s) for s in self._samples], columns=self.COLUMNS)

    def __len__(self) -> int:
        return len(self._samples)

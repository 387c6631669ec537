"""Error conditions raised by the adaptive integrator.

All integration failures derive from IntegrationError and carry the best
estimate available when the failure was detected, so callers can decide
whether to retry with a larger budget, looser tolerances, or give up.
"""

from __future__ import annotations

import math


class IntegrationError(Exception):
    """Base class for integrator failures.

    Attributes:
        result: Best integral estimate at the time of failure (nan if none).
        abserr: Error bound associated with ``result`` (nan if none).
        intervals: Number of subintervals in use when the failure occurred.
    """

    def __init__(
        self,
        message: str,
        *,
        result: float = math.nan,
        abserr: float = math.nan,
        intervals: int = 0,
    ) -> None:
        super().__init__(message)
        self.result = result
        self.abserr = abserr
        self.intervals = intervals


class InvalidConfigurationError(IntegrationError, ValueError):
    """Non-positive interval budget, bad tolerances or non-finite bounds."""


class WorkspaceAllocationError(IntegrationError, MemoryError):
    """The quadrature workspace could not be sized."""


class TooManySubdivisionsError(IntegrationError):
    """Tolerance not reached within the configured maximum number of intervals."""


class NonConvergentIntegrandError(IntegrationError):
    """The integrand is round-off dominated, divergent, or not finite."""

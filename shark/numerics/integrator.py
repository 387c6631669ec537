"""Adaptive definite-integral evaluator.

The Integrator estimates the integral of a scalar function over a finite
interval by error-driven bisection: the subinterval with the largest error
estimate is split in two until the summed error satisfies the requested
tolerance or the interval budget is used up. Each subinterval is evaluated
with an embedded Gauss-Kronrod pair (see ``shark.numerics.rules``).

Each Integrator owns one QuadratureWorkspace sized at construction and
reused by every call. Instances are not safe for concurrent use; copies get
their own workspace and are fully independent.

Example:
    >>> import math
    >>> integrator = Integrator(100)
    >>> value = integrator.integrate(lambda x, _: math.sin(x), None, 0.0, math.pi, 1e-10, 0.0)
    >>> round(value, 9)
    2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from shark.numerics.errors import (
    IntegrationError,
    InvalidConfigurationError,
    NonConvergentIntegrandError,
    TooManySubdivisionsError,
)
from shark.numerics.rules import GK7, GaussKronrodRule, Integrand, get_rule
from shark.numerics.workspace import QuadratureWorkspace, Subinterval

logger = logging.getLogger(__name__)

# Round-off detection thresholds (QUADPACK qag)
_ROUNDOFF_LIMIT = 6
_DIVERGENCE_LIMIT = 20
_DIVERGENCE_WARMUP = 10


@dataclass(frozen=True)
class IntegrationResult:
    """Outcome of a successful integration.

    Attributes:
        value: Integral estimate, negated for reversed bounds.
        abserr: Estimated absolute error.
        intervals: Subintervals used by this call.
    """

    value: float
    abserr: float
    intervals: int


class Integrator:
    """Adaptive quadrature engine with a bounded interval budget.

    Args:
        max_intervals: Maximum number of subintervals per call. Bounds both
            the workspace size and the work done by a single integration.
        rule: Embedded rule pair, as a GaussKronrodRule or its name.

    Raises:
        InvalidConfigurationError: If max_intervals is not a positive integer.
        WorkspaceAllocationError: If the workspace cannot be allocated.
    """

    def __init__(self, max_intervals: int, rule: GaussKronrodRule | str = GK7):
        if isinstance(max_intervals, bool) or not isinstance(max_intervals, int) or max_intervals <= 0:
            raise InvalidConfigurationError(f"max_intervals must be a positive integer, got {max_intervals!r}")
        self._rule = get_rule(rule) if isinstance(rule, str) else rule
        self._max_intervals = max_intervals
        self._num_intervals = 0
        self._workspace = QuadratureWorkspace(max_intervals)

    @property
    def max_intervals(self) -> int:
        return self._max_intervals

    @property
    def rule(self) -> GaussKronrodRule:
        return self._rule

    @property
    def num_intervals(self) -> int:
        """Intervals used since construction or the last reset."""
        return self._num_intervals

    def get_num_intervals(self) -> int:
        """Return the number of intervals used by all integrations so far.

        The count indicates how many times integrands have been evaluated,
        as each interval costs one application of the rule pair.
        """
        return self._num_intervals

    def reset_num_intervals(self) -> None:
        """Reset the interval count to zero."""
        self._num_intervals = 0

    # --- copying ---

    def copy(self) -> Integrator:
        """Return an independent Integrator with a fresh workspace.

        The copy has the same budget and rule, and its interval count
        starts at this instance's current count.
        """
        clone = Integrator(self._max_intervals, self._rule)
        clone._num_intervals = self._num_intervals
        return clone

    def __copy__(self) -> Integrator:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Integrator:
        clone = self.copy()
        memo[id(self)] = clone
        return clone

    def __repr__(self) -> str:
        return (
            f"Integrator(max_intervals={self._max_intervals}, rule={self._rule.name!r}, "
            f"num_intervals={self._num_intervals})"
        )

    # --- integration ---

    def integrate(
        self,
        f: Integrand,
        params: Any,
        a: float,
        b: float,
        epsabs: float,
        epsrel: float,
    ) -> float:
        """Integrate ``f(x, params)`` between a and b.

        Args:
            f: Integrand, called as ``f(x, params)``.
            params: Opaque object forwarded unchanged to every call of f.
            a: Lower bound. May exceed b, in which case the result is negated.
            b: Upper bound.
            epsabs: Absolute error tolerance (>= 0).
            epsrel: Relative error tolerance (>= 0).

        Returns:
            The integral estimate.

        Raises:
            InvalidConfigurationError: Bad tolerances or non-finite bounds.
            TooManySubdivisionsError: Tolerance not met within max_intervals.
            NonConvergentIntegrandError: Non-finite, divergent or round-off
                dominated integrand.
        """
        return self.integrate_with_error(f, params, a, b, epsabs, epsrel).value

    def integrate_with_error(
        self,
        f: Integrand,
        params: Any,
        a: float,
        b: float,
        epsabs: float,
        epsrel: float,
    ) -> IntegrationResult:
        """Like ``integrate`` but also report the error bound and interval count."""
        _check_call(a, b, epsabs, epsrel)

        sign = 1.0
        lower, upper = a, b
        if a > b:
            lower, upper, sign = b, a, -1.0

        workspace = self._workspace
        try:
            value, abserr = self._adaptive(f, params, lower, upper, epsabs, epsrel)
        except IntegrationError as exc:
            used = workspace.size
            if math.isnan(exc.result) and used:
                exc.result, exc.abserr = workspace.totals()
            exc.result = sign * exc.result
            exc.intervals = used
            self._num_intervals += used
            logger.warning(
                "Integration over [%g, %g] failed after %d intervals: %s",
                a, b, used, exc,
            )
            raise

        used = workspace.size
        self._num_intervals += used
        logger.debug(
            "Integrated over [%g, %g] (epsabs=%g, epsrel=%g): %.17g +/- %.3g using %d intervals",
            a, b, epsabs, epsrel, sign * value, abserr, used,
        )
        return IntegrationResult(value=sign * value, abserr=abserr, intervals=used)

    def _adaptive(
        self,
        f: Integrand,
        params: Any,
        a: float,
        b: float,
        epsabs: float,
        epsrel: float,
    ) -> tuple[float, float]:
        """Error-driven bisection on [a, b] with a <= b."""
        rule = self._rule
        workspace = self._workspace
        workspace.clear()

        first = rule.apply(f, params, a, b)
        workspace.initialise(a, b, first.integral, first.error)
        area = first.integral
        errsum = first.error

        roundoff = 0
        divergence = 0
        iteration = 1

        while errsum > max(epsabs, epsrel * abs(area)):
            if workspace.is_full():
                area, errsum = workspace.totals()
                raise TooManySubdivisionsError(
                    f"maximum number of subdivisions ({self._max_intervals}) reached "
                    f"before the requested tolerance",
                    result=area,
                    abserr=errsum,
                )

            index = workspace.pop_max_error()
            parent = workspace[index]
            mid = 0.5 * (parent.left + parent.right)
            if not parent.left < mid < parent.right:
                raise NonConvergentIntegrandError(
                    f"cannot bisect [{parent.left!r}, {parent.right!r}] any further; "
                    f"bad integrand behaviour near x={mid!r}"
                )

            left = rule.apply(f, params, parent.left, mid)
            right = rule.apply(f, params, mid, parent.right)
            area12 = left.integral + right.integral
            error12 = left.error + right.error

            area += area12 - parent.integral
            errsum += error12 - parent.error

            if abs(parent.integral - area12) <= 1e-5 * abs(area12) and error12 >= 0.99 * parent.error:
                roundoff += 1
            if iteration >= _DIVERGENCE_WARMUP and error12 > parent.error:
                divergence += 1

            depth = parent.depth + 1
            workspace.replace(
                index,
                Subinterval(parent.left, mid, left.integral, left.error, depth),
                Subinterval(mid, parent.right, right.integral, right.error, depth),
            )
            iteration += 1

            if roundoff >= _ROUNDOFF_LIMIT or divergence >= _DIVERGENCE_LIMIT:
                area, errsum = workspace.totals()
                raise NonConvergentIntegrandError(
                    "error estimate does not decrease under bisection; the integrand "
                    "is divergent or dominated by round-off",
                    result=area,
                    abserr=errsum,
                )

        return workspace.totals()


def _check_call(a: float, b: float, epsabs: float, epsrel: float) -> None:
    if not (math.isfinite(a) and math.isfinite(b)):
        raise InvalidConfigurationError(f"integration bounds must be finite, got [{a!r}, {b!r}]")
    if math.isnan(epsabs) or math.isnan(epsrel) or epsabs < 0 or epsrel < 0:
        raise InvalidConfigurationError(
            f"tolerances must be non-negative, got epsabs={epsabs!r}, epsrel={epsrel!r}"
        )
    if epsabs == 0 and epsrel == 0:
        raise InvalidConfigurationError("at least one of epsabs and epsrel must be positive")

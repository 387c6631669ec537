"""Embedded Gauss-Kronrod rule pairs.

Each rule evaluates the integrand once per Kronrod node. The Gauss nodes
are a subset of the Kronrod nodes, so the Gauss estimate comes for free and
the discrepancy between both estimates serves as the local error estimate.

Node and weight tables follow the QUADPACK layout: abscissae are the
non-negative Kronrod nodes in descending order with the centre last, and
the Gauss nodes sit at the odd positions of that table.
"""

from __future__ import annotations

import math
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from shark.numerics.errors import NonConvergentIntegrandError

EPSILON = sys.float_info.epsilon

Integrand = Callable[[float, Any], float]


@dataclass(frozen=True)
class RuleEstimate:
    """Result of applying a rule pair to one interval.

    Attributes:
        integral: Kronrod (higher order) estimate.
        error: Local error estimate.
        abs_integral: Kronrod estimate of the integral of |f|.
    """

    integral: float
    error: float
    abs_integral: float


@dataclass(frozen=True)
class GaussKronrodRule:
    """A Gauss rule with its Kronrod extension.

    Attributes:
        name: Short identifier, e.g. ``"gk21"``.
        gauss_points: Number of nodes of the embedded Gauss rule.
        abscissae: Non-negative Kronrod nodes on [-1, 1], descending, centre last.
        kronrod_weights: Kronrod weights matching ``abscissae``.
        gauss_weights: Gauss weights for the odd positions of ``abscissae``
            (plus the centre when ``gauss_points`` is odd).
    """

    name: str
    gauss_points: int
    abscissae: tuple[float, ...]
    kronrod_weights: tuple[float, ...]
    gauss_weights: tuple[float, ...]

    @property
    def points(self) -> int:
        """Function evaluations per application."""
        return 2 * len(self.abscissae) - 1

    @property
    def degree(self) -> int:
        """Highest polynomial degree integrated exactly by the Gauss rule."""
        return 2 * self.gauss_points - 1

    def apply(self, f: Integrand, params: Any, a: float, b: float) -> RuleEstimate:
        """Apply the rule pair on [a, b] (requires a <= b).

        Raises:
            NonConvergentIntegrandError: If f returns a non-finite value or
                the weighted sums overflow.
        """
        center = 0.5 * (a + b)
        half_length = 0.5 * (b - a)

        fc = _evaluate(f, params, center)
        result_kronrod = fc * self.kronrod_weights[-1]
        result_gauss = fc * self.gauss_weights[-1] if self.gauss_points % 2 else 0.0
        result_abs = abs(result_kronrod)

        for j, x in enumerate(self.abscissae[:-1]):
            dx = half_length * x
            f1 = _evaluate(f, params, center - dx)
            f2 = _evaluate(f, params, center + dx)
            result_kronrod += self.kronrod_weights[j] * (f1 + f2)
            result_abs += self.kronrod_weights[j] * (abs(f1) + abs(f2))
            if j % 2 == 1:
                result_gauss += self.gauss_weights[j // 2] * (f1 + f2)

        integral = result_kronrod * half_length
        abs_integral = result_abs * abs(half_length)
        error = abs((result_kronrod - result_gauss) * half_length)
        if not (math.isfinite(integral) and math.isfinite(error)):
            raise NonConvergentIntegrandError(
                f"rule estimate over [{a!r}, {b!r}] overflowed: integral={integral!r}, error={error!r}"
            )
        # Never claim more accuracy than the arithmetic can deliver
        error = max(error, 50.0 * EPSILON * abs_integral)
        return RuleEstimate(integral=integral, error=error, abs_integral=abs_integral)


def _evaluate(f: Integrand, params: Any, x: float) -> float:
    value = f(x, params)
    if not math.isfinite(value):
        raise NonConvergentIntegrandError(f"integrand is not finite at x={x!r}: {value!r}")
    return value


GK7 = GaussKronrodRule(
    name="gk7",
    gauss_points=3,
    abscissae=(
        0.960491268708020283423507092629080,
        0.774596669241483377035853079956480,
        0.434243749346802558002071502844628,
        0.0,
    ),
    kronrod_weights=(
        0.104656226026467265193823857192073,
        0.268488089868333440728569280666710,
        0.401397414775962222905051818618432,
        0.450916538658474142345110087045571,
    ),
    gauss_weights=(
        0.555555555555555555555555555555556,
        0.888888888888888888888888888888889,
    ),
)

GK15 = GaussKronrodRule(
    name="gk15",
    gauss_points=7,
    abscissae=(
        0.991455371120812639206854697526329,
        0.949107912342758524526189684047851,
        0.864864423359769072789712788640926,
        0.741531185599394439863864773280788,
        0.586087235467691130294144845693013,
        0.405845151377397166906606412076961,
        0.207784955007898467600689403773245,
        0.0,
    ),
    kronrod_weights=(
        0.022935322010529224963732008058970,
        0.063092092629978553290700663189204,
        0.104790010322250183839876322541518,
        0.140653259715525918745189590510238,
        0.169004726639267902826583426598550,
        0.190350578064785409913256402421014,
        0.204432940075298892414161999234649,
        0.209482141084727828012999174891714,
    ),
    gauss_weights=(
        0.129484966168869693270611432679082,
        0.279705391489276667901467771423780,
        0.381830050505118944950369775488975,
        0.417959183673469387755102040816327,
    ),
)

GK21 = GaussKronrodRule(
    name="gk21",
    gauss_points=10,
    abscissae=(
        0.995657163025808080735527280689003,
        0.973906528517171720077964012084452,
        0.930157491355708226001207180059508,
        0.865063366688984510732096688423493,
        0.780817726586416897063717578345042,
        0.679409568299024406234327365114874,
        0.562757134668604683339000099272694,
        0.433395394129247190799265943165784,
        0.294392862701460198131126603103866,
        0.148874338981631210884826001129720,
        0.0,
    ),
    kronrod_weights=(
        0.011694638867371874278064396062192,
        0.032558162307964727478818972459390,
        0.054755896574351996031381300244580,
        0.075039674810919952767043140916190,
        0.093125454583697605535065465083366,
        0.109387158802297641899210590325805,
        0.123491976262065851077208745129429,
        0.134709217311473325928054001771707,
        0.142775938577060080797094273138717,
        0.147739104901338491374841515972068,
        0.149445554002916905664936468389821,
    ),
    gauss_weights=(
        0.066671344308688137593568809893332,
        0.149451349150580593145776339657697,
        0.219086362515982043995534934228163,
        0.269266719309996355091226921569469,
        0.295524224714752870173892994651338,
    ),
)

RULES: dict[str, GaussKronrodRule] = {rule.name: rule for rule in (GK7, GK15, GK21)}


def get_rule(name: str) -> GaussKronrodRule:
    """Look up a rule by name (``gk7``, ``gk15`` or ``gk21``)."""
    try:
        return RULES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown quadrature rule '{name}', expected one of {sorted(RULES)}") from None

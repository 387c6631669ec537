"""Interval budget calibration for the adaptive integrator.

Integrates a few representative integrands at several tolerances and
reports how many intervals each call needed and how long it took. The
numbers help choose ``max_intervals`` for production runs: too small and
calls fail with TooManySubdivisionsError, too large and pathological
integrands burn time before failing.

Run:
    python examples/interval_budget.py --max-intervals 200 --log-level DEBUG
"""

from __future__ import annotations

import math

import shark
from shark import IntegrationError, IntegrationProfiler, Integrator, Timer


def nfw_mass_integrand(r: float, concentration: float) -> float:
    """Shell mass of an NFW halo of unit virial radius (arbitrary units)."""
    x = concentration * r
    return r * r / (x * (1.0 + x) ** 2)


def damped_oscillation(t: float, params: tuple[float, float]) -> float:
    decay, frequency = params
    return math.exp(-decay * t) * math.cos(frequency * t)


CASES = [
    ("nfw c=5", nfw_mass_integrand, 5.0, 0.0, 1.0),
    ("nfw c=20", nfw_mass_integrand, 20.0, 0.0, 1.0),
    ("damped cos", damped_oscillation, (0.5, 30.0), 0.0, 10.0),
    ("sqrt cusp", lambda x, _: math.sqrt(abs(x - 0.3)), None, 0.0, 1.0),
]


def run_calibration(max_intervals: int, tolerances: list[float]) -> IntegrationProfiler:
    profiler = IntegrationProfiler(Integrator(max_intervals))
    for epsrel in tolerances:
        for name, f, params, a, b in CASES:
            try:
                profiler.integrate(f, params, a, b, 0.0, epsrel)
            except IntegrationError as exc:
                print(f"  {name} @ epsrel={epsrel:g}: {type(exc).__name__} ({exc.intervals} intervals)")
    return profiler


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Interval budget calibration")
    parser.add_argument("--max-intervals", type=int, default=100, help="Interval budget per call")
    parser.add_argument("--log-level", type=str, default="", help="Enable console logging at this level")
    args = parser.parse_args()

    if args.log_level:
        shark.enable_console_logging(level=args.log_level)

    timer = Timer()
    profile = run_calibration(args.max_intervals, [1e-4, 1e-7, 1e-10])

    df = profile.to_dataframe()
    df["elapsed"] = df["elapsed_ns"].map(shark.ns_time)
    print(df[["a", "b", "value", "abserr", "intervals", "elapsed", "ok"]].to_string(index=False))
    print(f"\nTotal intervals: {profile.total_intervals} on {shark.gethostname()} in {timer}")

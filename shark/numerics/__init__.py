"""Numerical methods for simulation computations.

This module provides pure Python implementations of:
- Embedded Gauss-Kronrod rule pairs
- Adaptive quadrature with a bounded interval budget (Integrator)
"""

from shark.numerics.errors import (
    IntegrationError,
    InvalidConfigurationError,
    NonConvergentIntegrandError,
    TooManySubdivisionsError,
    WorkspaceAllocationError,
)
from shark.numerics.integrator import IntegrationResult, Integrator
from shark.numerics.rules import GK7, GK15, GK21, GaussKronrodRule, RuleEstimate, get_rule
from shark.numerics.workspace import QuadratureWorkspace, Subinterval

__all__ = [
    "GK7",
    "GK15",
    "GK21",
    "GaussKronrodRule",
    "IntegrationError",
    "IntegrationResult",
    "Integrator",
    "InvalidConfigurationError",
    "NonConvergentIntegrandError",
    "QuadratureWorkspace",
    "RuleEstimate",
    "Subinterval",
    "TooManySubdivisionsError",
    "WorkspaceAllocationError",
    "get_rule",
]

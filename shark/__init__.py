"""shark: numerical and bookkeeping infrastructure for the simulation.

Provides an adaptive integrator with a bounded interval budget, a
nanosecond stopwatch for profiling, and small string/file/host helpers.
"""

import logging

from shark.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)

# Silent unless the application opts in
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-exports for concise imports
from shark.instrumentation import IntegrationProfiler, IntegrationSample, Timer, ns_time
from shark.numerics import (
    GK7,
    GK15,
    GK21,
    GaussKronrodRule,
    IntegrationError,
    IntegrationResult,
    Integrator,
    InvalidConfigurationError,
    NonConvergentIntegrandError,
    QuadratureWorkspace,
    TooManySubdivisionsError,
    WorkspaceAllocationError,
)
from shark.utils import (
    FileOpenError,
    empty_or_comment,
    gethostname,
    lower,
    open_file,
    tokenize,
    trim,
    upper,
)

__version__ = "0.1.0"

__all__ = [
    # Numerics
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
    "TooManySubdivisionsError",
    "WorkspaceAllocationError",
    # Instrumentation
    "IntegrationProfiler",
    "IntegrationSample",
    "Timer",
    "ns_time",
    # Utilities
    "FileOpenError",
    "empty_or_comment",
    "gethostname",
    "lower",
    "open_file",
    "tokenize",
    "trim",
    "upper",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]

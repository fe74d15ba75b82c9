"""
Core infrastructure for pysimstats.

Shared abstractions used by every domain sub-package (datasets,
montecarlo, diagnostics).

Key components:
    datasource: DataSource column container and file loading
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    config: SimulationDefaults
    compute: Timing and seeded random number generators
"""

from pysimstats.core.datasource import DataSource
from pysimstats.core.result import Result
from pysimstats.core.config import DEFAULTS, SimulationDefaults
from pysimstats.core._logging import configure_logging
from pysimstats.core.exceptions import (
    PySimStatsError,
    ValidationError,
    DimensionError,
    SampleSizeError,
    DataFormatError,
    NumericalError,
)

__all__ = [
    "DataSource",
    "Result",
    "DEFAULTS",
    "SimulationDefaults",
    "configure_logging",
    # Exceptions
    "PySimStatsError",
    "ValidationError",
    "DimensionError",
    "SampleSizeError",
    "DataFormatError",
    "NumericalError",
]

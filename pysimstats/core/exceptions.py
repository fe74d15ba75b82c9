"""
Exception hierarchy for pysimstats.

All exceptions inherit from PySimStatsError so callers can catch any
library-specific error in one place. Errors carry the offending values
as attributes and state actual vs expected in the message.
"""

from __future__ import annotations


class PySimStatsError(Exception):
    """Base exception for all pysimstats errors."""
    pass


class ValidationError(PySimStatsError):
    """
    Input validation failed.

    Raised when user-provided data fails validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.
    """
    pass


class SampleSizeError(ValidationError):
    """
    Requested sample is larger than the population can supply.

    Sampling without replacement cannot draw more units than exist.

    Attributes:
        requested: Sample size asked for
        available: Number of units in the population
    """

    def __init__(self, message: str, requested: int, available: int):
        super().__init__(message)
        self.requested = requested
        self.available = available


class DataFormatError(PySimStatsError):
    """
    A data file could not be parsed into the expected table.

    Attributes:
        path: File that failed to load, if known
        missing_columns: Required columns absent from the header
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        missing_columns: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.path = path
        self.missing_columns = missing_columns


class NumericalError(PySimStatsError):
    """
    Numerical computation produced no usable value.

    Typically a zero standard error when standardising a difference.

    Attributes:
        quantity: Name of the quantity that degenerated
    """

    def __init__(self, message: str, quantity: str | None = None):
        super().__init__(message)
        self.quantity = quantity

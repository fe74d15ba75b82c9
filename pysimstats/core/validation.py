"""
Input validation utilities for pysimstats.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pysimstats.core.exceptions import (
    ValidationError,
    DimensionError,
    SampleSizeError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a floating-point numpy array.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}"
        )


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        ValidationError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} samples, got {n}"
        )


def check_vector(array: ArrayLike, name: str, min_samples: int = 1) -> NDArray[np.floating[Any]]:
    """
    Convert and validate a finite 1D sample in one call.

    Returns:
        A float64 copy, so callers may keep it without aliasing user data
    """
    arr = check_array(array, name)
    check_1d(arr, name)
    check_min_samples(arr, min_samples, name)
    check_finite(arr, name)
    return np.array(arr, dtype=np.float64)


def check_positive_int(value: Any, name: str) -> int:
    """
    Verify value is an integer >= 1.

    Raises:
        ValidationError: If value is not an integer or is < 1
    """
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValidationError(
            f"{name}: expected a positive integer, got {type(value).__name__}"
        )
    if value < 1:
        raise ValidationError(f"{name}: must be >= 1, got {value}")
    return int(value)


def check_sample_size(n: int, available: int, name: str, replace: bool = False) -> None:
    """
    Verify a sample of size n can be drawn from `available` units.

    Without replacement n may not exceed the population size.

    Raises:
        SampleSizeError: If n > available and replace is False
        ValidationError: If the population is empty
    """
    if available < 1:
        raise ValidationError(f"{name}: population is empty")
    if not replace and n > available:
        raise SampleSizeError(
            f"{name}: cannot draw {n} units without replacement "
            f"from a population of {available}",
            requested=n,
            available=available,
        )


def check_probabilities(probs: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """
    Verify every value lies in [0, 1].

    Raises:
        ValidationError: If any probability is outside [0, 1] or NaN
    """
    arr = np.atleast_1d(check_array(probs, name)).astype(np.float64)
    if np.any(np.isnan(arr)) or np.any(arr < 0.0) or np.any(arr > 1.0):
        raise ValidationError(
            f"{name}: probabilities must lie in [0, 1], "
            f"got range [{np.nanmin(arr)}, {np.nanmax(arr)}]"
        )
    return arr

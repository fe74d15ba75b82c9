"""
Plotting positions and continuous sample quantiles.

Implements the continuous Hyndman & Fan (1996) quantile definitions
(R types 4-9) and R's ppoints(), the probability grid qqnorm() uses.

Reference:
    Hyndman, R.J. and Fan, Y. (1996) "Sample Quantiles in Statistical
    Packages", The American Statistician, 50(4), 361-365.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysimstats.core.exceptions import ValidationError
from pysimstats.core.validation import check_probabilities, check_vector

# (a, b) in p(k) = (k - a) / (n + 1 - a - b)
_PLOTTING_CONSTANTS = {
    4: (0.0, 1.0),
    5: (0.5, 0.5),
    6: (0.0, 0.0),
    7: (1.0, 1.0),
    8: (1.0 / 3.0, 1.0 / 3.0),
    9: (3.0 / 8.0, 3.0 / 8.0),
}

# R fuzz factor: 4 * machine epsilon
_FUZZ = 4.0 * np.finfo(np.float64).eps


def ppoints(n: int) -> NDArray[np.floating[Any]]:
    """
    R's ppoints(n): (k - a) / (n + 1 - 2a), k = 1..n.

    a = 3/8 for n <= 10, otherwise 1/2.
    """
    if n < 0:
        raise ValidationError(f"n: must be >= 0, got {n}")
    if n == 0:
        return np.empty(0, dtype=np.float64)
    a = 3.0 / 8.0 if n <= 10 else 0.5
    k = np.arange(1, n + 1, dtype=np.float64)
    return (k - a) / (n + 1.0 - 2.0 * a)


def midpoints(n: int) -> NDArray[np.floating[Any]]:
    """Equally spaced positions (k + 0.5) / n, k = 0..n-1."""
    if n < 0:
        raise ValidationError(f"n: must be >= 0, got {n}")
    return (np.arange(n, dtype=np.float64) + 0.5) / n if n else np.empty(0)


def sample_quantiles(
    x: ArrayLike,
    probs: ArrayLike,
    qtype: int = 7,
) -> NDArray[np.floating[Any]]:
    """
    Compute quantiles matching R's quantile(x, probs, type=qtype).

    Parameters
    ----------
    x : array-like
        1D finite sample, any order.
    probs : array-like
        Probabilities in [0, 1].
    qtype : int
        Continuous R quantile type, 4-9. Default 7 (R's default).

    Returns
    -------
    NDArray
        Quantile values, one per probability.
    """
    if qtype not in _PLOTTING_CONSTANTS:
        raise ValidationError(f"Quantile type must be 4-9, got {qtype}")

    xs = np.sort(check_vector(x, "x"))
    p = check_probabilities(probs, "probs")
    n = len(xs)
    if n == 1:
        return np.full(len(p), xs[0])

    a, b = _PLOTTING_CONSTANTS[qtype]
    # nppm is the 1-based fractional order statistic
    nppm = a + p * (n + 1.0 - a - b)
    j = np.floor(nppm + _FUZZ).astype(int)
    h = nppm - j
    h = np.where(np.abs(h) < _FUZZ, 0.0, h)
    h = np.where(np.abs(h - 1.0) < _FUZZ, 1.0, h)

    lo = np.clip(j - 1, 0, n - 1)
    hi = np.clip(j, 0, n - 1)
    result = (1.0 - h) * xs[lo] + h * xs[hi]
    result = np.where(j < 1, xs[0], result)
    result = np.where(j >= n, xs[n - 1], result)
    return result

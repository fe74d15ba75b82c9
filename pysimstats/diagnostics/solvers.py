"""
Quantile-quantile comparisons.

Provides R-named functions: qqnorm(), qqplot(), qqline(), plus qq()
for comparing against a t reference.
"""

from __future__ import annotations

from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats as sp_stats

from pysimstats.core.exceptions import DimensionError, ValidationError
from pysimstats.core.validation import check_array, check_probabilities, check_vector
from pysimstats.diagnostics._quantile_types import ppoints, sample_quantiles
from pysimstats.diagnostics.solution import QQSolution


Distribution = Literal["norm", "t"]


def _reference_ppf(
    probs: NDArray[np.floating[Any]],
    distribution: str,
    df: float | None,
) -> NDArray[np.floating[Any]]:
    """Quantile function of the reference distribution."""
    if distribution == "norm":
        return sp_stats.norm.ppf(probs)
    if distribution == "t":
        if df is None or not np.isfinite(df) or df <= 0:
            raise ValidationError(f"df: t reference needs df > 0, got {df}")
        return sp_stats.t.ppf(probs, df)
    raise ValidationError(
        f"distribution must be 'norm' or 't', got {distribution!r}"
    )


def qq(
    sample: ArrayLike,
    distribution: Distribution = "norm",
    *,
    df: float | None = None,
    probs: ArrayLike | None = None,
) -> QQSolution:
    """
    Compare a sample's quantiles to a theoretical distribution.

    Parameters
    ----------
    sample : array-like
        1D finite sample. NaN values are dropped.
    distribution : str
        "norm" (default) or "t".
    df : float or None
        Degrees of freedom, required for distribution="t".
    probs : array-like or None
        Probability positions, one per observation. Default ppoints(n);
        midpoints(n) gives the (k + 0.5)/n grid.

    Returns
    -------
    QQSolution
    """
    arr = check_array(sample, "sample")
    arr = arr[~np.isnan(arr)] if arr.ndim == 1 else arr
    y = np.sort(check_vector(arr, "sample"))
    n = len(y)

    if probs is None:
        p = ppoints(n)
    else:
        p = check_probabilities(probs, "probs")
        if len(p) != n:
            raise DimensionError(
                f"probs: expected {n} positions (one per observation), got {len(p)}"
            )

    theoretical = _reference_ppf(p, distribution, df)
    return QQSolution(
        theoretical=np.asarray(theoretical, dtype=np.float64),
        sample=y,
        distribution=distribution,
        df=float(df) if distribution == "t" else None,
    )


def qqnorm(sample: ArrayLike) -> QQSolution:
    """Normal QQ comparison. Matches R qqnorm() positions."""
    return qq(sample, "norm")


def qqplot(x: ArrayLike, y: ArrayLike) -> QQSolution:
    """
    Two-sample QQ comparison. Matches R qqplot().

    When the samples differ in length, the longer one is linearly
    interpolated down to the length of the shorter one.
    """
    sx = np.sort(check_vector(x, "x"))
    sy = np.sort(check_vector(y, "y"))
    lenx, leny = len(sx), len(sy)
    if leny < lenx:
        sx = np.interp(np.linspace(1, lenx, leny), np.arange(1, lenx + 1), sx)
    elif lenx < leny:
        sy = np.interp(np.linspace(1, leny, lenx), np.arange(1, leny + 1), sy)
    return QQSolution(theoretical=sx, sample=sy, distribution="sample")


def qqline(
    sample: ArrayLike,
    distribution: Distribution = "norm",
    df: float | None = None,
    *,
    probs: tuple[float, float] = (0.25, 0.75),
    qtype: int = 7,
) -> tuple[float, float]:
    """
    Line through the sample's quartiles against the reference quartiles.

    Matches R qqline().

    Returns
    -------
    (intercept, slope)
    """
    p = check_probabilities(probs, "probs")
    if len(p) != 2 or p[0] == p[1]:
        raise ValidationError(f"probs: need two distinct probabilities, got {probs}")
    yq = sample_quantiles(sample, p, qtype=qtype)
    xq = _reference_ppf(p, distribution, df)
    slope = float((yq[1] - yq[0]) / (xq[1] - xq[0]))
    intercept = float(yq[0] - slope * xq[0])
    return intercept, slope

"""
Two-sample test statistics.

Every statistic has the signature fn(x, y) -> float so it can be used
interchangeably by the null-distribution simulation and the permutation
test.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pysimstats.core.exceptions import ValidationError


def mean_diff(x: NDArray[np.floating[Any]], y: NDArray[np.floating[Any]]) -> float:
    """Difference in means, mean(x) - mean(y)."""
    return float(np.mean(x) - np.mean(y))


def median_diff(x: NDArray[np.floating[Any]], y: NDArray[np.floating[Any]]) -> float:
    """Difference in medians, median(x) - median(y)."""
    return float(np.median(x) - np.median(y))


def t_stat(x: NDArray[np.floating[Any]], y: NDArray[np.floating[Any]]) -> float:
    """
    Standardised difference in means with unpooled standard error.

        t = (mean(x) - mean(y)) / sqrt(var(x)/nx + var(y)/ny)

    Variances use ddof=1. Returns NaN when both samples are constant
    (zero standard error); callers decide how to report that.

    Raises:
        ValidationError: If either sample has fewer than 2 values
    """
    nx, ny = len(x), len(y)
    if nx < 2 or ny < 2:
        raise ValidationError(
            f"t_stat: each sample needs at least 2 values, got {nx} and {ny}"
        )
    se = np.sqrt(np.var(x, ddof=1) / nx + np.var(y, ddof=1) / ny)
    if se == 0.0:
        return float('nan')
    return float((np.mean(x) - np.mean(y)) / se)


def pooled_df(nx: int, ny: int) -> float:
    """Degrees of freedom of the equal-variance two-sample t: nx + ny - 2."""
    return float(nx + ny - 2)


def t_pvalue(t: float, df: float, alternative: str = "two.sided") -> float:
    """
    p-value of t under a t(df) reference distribution.

    Returns NaN for a NaN statistic or non-positive df.
    """
    if np.isnan(t) or np.isnan(df) or df <= 0:
        return float('nan')
    if alternative == "two.sided":
        return float(2.0 * sp_stats.t.sf(abs(t), df))
    elif alternative == "less":
        return float(sp_stats.t.cdf(t, df))
    elif alternative == "greater":
        return float(sp_stats.t.sf(t, df))
    raise ValueError(
        f"alternative must be 'two.sided', 'less', or 'greater', got {alternative!r}"
    )


STATISTIC_NAMES = {
    mean_diff: "mean difference",
    median_diff: "median difference",
    t_stat: "t",
}


def statistic_name(statistic) -> str:
    """Readable name for a statistic callable, used in summaries."""
    if statistic in STATISTIC_NAMES:
        return STATISTIC_NAMES[statistic]
    return getattr(statistic, '__name__', 'statistic')

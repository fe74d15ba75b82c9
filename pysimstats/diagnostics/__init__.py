"""
Distribution diagnostics.

Quantile-quantile comparisons of simulated statistics against normal and
t references, plus the sample-quantile and plotting-position helpers
they rest on.

Usage:
    from pysimstats.diagnostics import qq, qqnorm, qqline

    result = qqnorm(tstats)
    result.max_abs_deviation()
    result.plot()                       # needs matplotlib

    qq(tstats, "t", df=4)
"""

from pysimstats.diagnostics._quantile_types import midpoints, ppoints, sample_quantiles
from pysimstats.diagnostics.solution import QQSolution
from pysimstats.diagnostics.solvers import qq, qqline, qqnorm, qqplot

__all__ = [
    "qq",
    "qqnorm",
    "qqplot",
    "qqline",
    "ppoints",
    "midpoints",
    "sample_quantiles",
    "QQSolution",
]

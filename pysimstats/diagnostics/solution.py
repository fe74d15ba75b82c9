"""
Solution wrapper for quantile-quantile comparisons.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    import matplotlib.axes


DISTRIBUTION_LABELS = {
    "norm": "Normal",
    "t": "t",
    "sample": "Sample",
}


@dataclass(frozen=True)
class QQSolution:
    """
    Paired quantiles of a sample against a reference.

    The reference is a theoretical distribution ("norm" or "t") or a
    second sample ("sample"). Points on the identity line mean the two
    agree; systematic curvature in the tails is how a normal reference
    fails for small-sample t-statistics.

    Attributes:
        theoretical: Reference quantiles (x axis), ascending.
        sample: Sorted sample quantiles (y axis).
        distribution: "norm", "t", or "sample".
        df: Degrees of freedom for the t reference, else None.
    """
    theoretical: NDArray[np.floating[Any]]
    sample: NDArray[np.floating[Any]]
    distribution: str
    df: float | None = None

    @property
    def n(self) -> int:
        """Number of plotted points."""
        return len(self.sample)

    @property
    def reference_label(self) -> str:
        label = DISTRIBUTION_LABELS.get(self.distribution, self.distribution)
        if self.distribution == "t" and self.df is not None:
            return f"{label}(df={self.df:g}) quantiles"
        return f"{label} quantiles"

    def max_abs_deviation(self) -> float:
        """Largest vertical distance from the identity line."""
        return float(np.max(np.abs(self.sample - self.theoretical)))

    def correlation(self) -> float:
        """Pearson correlation of the paired quantiles (probability plot r)."""
        if self.n < 2:
            return float('nan')
        return float(np.corrcoef(self.theoretical, self.sample)[0, 1])

    def plot(
        self,
        ax: 'matplotlib.axes.Axes | None' = None,
        *,
        identity: bool = True,
        line: bool = False,
        title: str | None = None,
    ) -> 'matplotlib.axes.Axes':
        """Draw the QQ plot. Requires matplotlib."""
        from pysimstats.diagnostics.plotting import plot_qq
        return plot_qq(self, ax=ax, identity=identity, line=line, title=title)

    def summary(self) -> str:
        """Short text comparison against the identity line."""
        lines = [
            "\nQ-Q COMPARISON",
            "",
            f"Reference: {self.reference_label}",
            f"Points: {self.n}",
            f"Max |sample - reference|: {self.max_abs_deviation():.4g}",
            f"Quantile correlation: {self.correlation():.4f}",
            "",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"QQSolution(distribution={self.distribution!r}, n={self.n}, "
            f"max_dev={self.max_abs_deviation():.4g})"
        )

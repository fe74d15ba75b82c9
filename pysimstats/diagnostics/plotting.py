"""
Matplotlib figures for simulation results.

matplotlib is an optional dependency (the ``plot`` extra) and is only
imported when a figure is requested.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike

from pysimstats.diagnostics.solvers import qqline

if TYPE_CHECKING:
    import matplotlib.axes
    from pysimstats.diagnostics.solution import QQSolution


def _axes(ax):
    if ax is not None:
        return ax
    import matplotlib.pyplot as plt
    _, ax = plt.subplots(figsize=(6, 6))
    return ax


def plot_qq(
    qq: QQSolution,
    ax: 'matplotlib.axes.Axes | None' = None,
    *,
    identity: bool = True,
    line: bool = False,
    title: str | None = None,
) -> 'matplotlib.axes.Axes':
    """
    Scatter sample quantiles against reference quantiles.

    identity draws y = x; line draws the quartile line from qqline(),
    which is only defined for a theoretical reference.
    """
    ax = _axes(ax)
    ax.scatter(qq.theoretical, qq.sample, s=12, alpha=0.7,
               color='steelblue', edgecolor='none')

    lo = float(min(qq.theoretical.min(), qq.sample.min()))
    hi = float(max(qq.theoretical.max(), qq.sample.max()))
    if identity:
        ax.plot([lo, hi], [lo, hi], color='red', linewidth=1.5, label='y = x')
    if line and qq.distribution != "sample":
        intercept, slope = qqline(qq.sample, qq.distribution, df=qq.df)
        xs = np.array([qq.theoretical.min(), qq.theoretical.max()])
        ax.plot(xs, intercept + slope * xs, color='orange', linestyle='--',
                linewidth=1.5, label='quartile line')

    ax.set_xlabel(qq.reference_label)
    ax.set_ylabel('Sample quantiles')
    ax.set_title(title or f'Q-Q plot against {qq.reference_label}')
    if identity or line:
        ax.legend(loc='upper left')
    ax.grid(True, alpha=0.3)
    return ax


def plot_null_distribution(
    values: ArrayLike,
    observed: float | None = None,
    ax: 'matplotlib.axes.Axes | None' = None,
    *,
    bins: int | None = None,
    title: str | None = None,
    xlabel: str = 'Statistic',
) -> 'matplotlib.axes.Axes':
    """
    Histogram of simulated or permuted statistics.

    When observed is given it is marked with a vertical line, the way
    the permutation test compares the observed difference to its null.
    """
    arr = np.asarray(values, dtype=np.float64)
    arr = arr[np.isfinite(arr)]
    ax = _axes(ax)
    if bins is None:
        bins = max(10, min(50, len(arr) // 20))
    ax.hist(arr, bins=bins, alpha=0.7, color='skyblue', edgecolor='black')
    if observed is not None:
        ax.axvline(observed, color='red', linewidth=2,
                   label=f'Observed = {observed:.4g}')
        ax.legend(loc='upper right')
    ax.set_xlabel(xlabel)
    ax.set_ylabel('Frequency')
    ax.set_title(title or 'Null distribution')
    ax.grid(True, alpha=0.3)
    return ax


def save_figure(ax: 'matplotlib.axes.Axes', path: Any) -> None:
    """Save the figure owning ax and release it."""
    import matplotlib.pyplot as plt
    fig = ax.get_figure()
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)

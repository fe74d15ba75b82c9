"""
Solution wrappers for Monte Carlo results.

SimulationSolution and PermutationSolution wrap Result[P] and provide
convenient accessors and summary output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from pysimstats.core.exceptions import ValidationError
from pysimstats.core.result import Result
from pysimstats.diagnostics import QQSolution, qq
from pysimstats.montecarlo._common import PermutationParams, SimulationParams
from pysimstats.montecarlo._statistics import pooled_df

if TYPE_CHECKING:
    import matplotlib.axes
    from pysimstats.montecarlo.design import PermutationDesign, SimulationDesign


@dataclass
class SimulationSolution:
    """
    User-facing null-distribution simulation results.

    Holds R replicated statistics and compares them with the normal
    (large-sample) and t (exact under normality) references.
    """
    _result: Result[SimulationParams]
    _design: 'SimulationDesign'

    # --- Core fields ---

    @property
    def stats(self) -> NDArray[np.floating[Any]]:
        """Replicated statistics, shape (R,). NaN where undefined."""
        return self._result.params.stats

    @property
    def R(self) -> int:
        """Number of replicates."""
        return self._result.params.R

    @property
    def n(self) -> int:
        """Per-group sample size."""
        return self._result.params.n

    @property
    def sim(self) -> str:
        """Simulation type: "population" or "parametric"."""
        return self._result.params.sim

    @property
    def statistic_name(self) -> str:
        return self._result.params.statistic_name

    @property
    def df(self) -> float:
        """Reference t degrees of freedom, 2n - 2."""
        return pooled_df(self.n, self.n)

    @property
    def finite_stats(self) -> NDArray[np.floating[Any]]:
        """Replicates with a defined statistic."""
        return self.stats[np.isfinite(self.stats)]

    @property
    def mean(self) -> float:
        return float(np.mean(self.finite_stats))

    @property
    def sd(self) -> float:
        return float(np.std(self.finite_stats, ddof=1)) if len(self.finite_stats) > 1 else float('nan')

    # --- Comparisons ---

    def tail_proportion(self, threshold: float) -> float:
        """Fraction of replicates with |statistic| > threshold."""
        return float(np.mean(np.abs(self.finite_stats) > threshold))

    def theoretical_tail(self, threshold: float, distribution: str = "norm") -> float:
        """
        P(|T| > threshold) under the reference distribution.

        distribution is "norm" or "t" (with df = 2n - 2).
        """
        if distribution == "norm":
            return float(2.0 * sp_stats.norm.sf(abs(threshold)))
        if distribution == "t":
            return float(2.0 * sp_stats.t.sf(abs(threshold), self.df))
        raise ValidationError(
            f"distribution must be 'norm' or 't', got {distribution!r}"
        )

    def qq(self, distribution: str = "norm", *, probs=None) -> QQSolution:
        """QQ comparison of the replicates against a normal or t(2n-2) reference."""
        df = self.df if distribution == "t" else None
        return qq(self.finite_stats, distribution, df=df, probs=probs)

    def plot(
        self,
        ax: 'matplotlib.axes.Axes | None' = None,
        **kwargs,
    ) -> 'matplotlib.axes.Axes':
        """Histogram of the replicates. Requires matplotlib."""
        from pysimstats.diagnostics.plotting import plot_null_distribution
        kwargs.setdefault('xlabel', self.statistic_name)
        kwargs.setdefault('title', f'Simulated {self.statistic_name} (n={self.n}, R={self.R})')
        return plot_null_distribution(self.stats, ax=ax, **kwargs)

    # --- Metadata ---

    @property
    def seed(self):
        """Seed or Generator used."""
        return self._design.seed

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Display ---

    def summary(self, threshold: float = 2.0) -> str:
        """
        Simulation summary with tail proportions at threshold.

        Produces:
            POPULATION NULL SIMULATION

            Statistic: t    n per group: 10    Replicates: 1000
            Mean: 0.0123    SD: 1.0456
            P(|t| > 2):  simulated 0.0610   normal 0.0455   t(18) 0.0608
        """
        title = {
            "population": "POPULATION NULL SIMULATION",
            "parametric": "PARAMETRIC NULL SIMULATION",
        }.get(self.sim, "NULL SIMULATION")
        lines = [
            f"\n{title}",
            "",
            f"Statistic: {self.statistic_name}    n per group: {self.n}    "
            f"Replicates: {self.R}",
            f"Mean: {self.mean:.4f}    SD: {self.sd:.4f}",
            f"P(|{self.statistic_name}| > {threshold:g}):  "
            f"simulated {self.tail_proportion(threshold):.4f}   "
            f"normal {self.theoretical_tail(threshold, 'norm'):.4f}   "
            f"t({self.df:g}) {self.theoretical_tail(threshold, 't'):.4f}",
        ]
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"SimulationSolution(sim={self.sim!r}, n={self.n}, R={self.R}, "
            f"backend={self.backend_name!r})"
        )


@dataclass
class PermutationSolution:
    """
    User-facing permutation test results.

    Provides observed statistic, permutation distribution, and p-value.
    """
    _result: Result[PermutationParams]
    _design: 'PermutationDesign'

    # --- Core fields ---

    @property
    def observed_stat(self) -> float:
        """Test statistic on original (unpermuted) data."""
        return self._result.params.observed_stat

    @property
    def perm_stats(self) -> NDArray[np.floating[Any]]:
        """Permutation distribution, shape (R,)."""
        return self._result.params.perm_stats

    @property
    def count(self) -> int:
        """Permutations at least as extreme as the observed statistic."""
        return self._result.params.count

    @property
    def p_value(self) -> float:
        """Permutation p-value."""
        return self._result.params.p_value

    @property
    def R(self) -> int:
        """Number of permutations."""
        return self._result.params.R

    @property
    def alternative(self) -> str:
        """Alternative hypothesis direction."""
        return self._result.params.alternative

    @property
    def smoothing(self) -> bool:
        """Whether the p-value adds one to numerator and denominator."""
        return self._result.params.smoothing

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        return self._design.x

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        return self._design.y

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def plot(
        self,
        ax: 'matplotlib.axes.Axes | None' = None,
        **kwargs,
    ) -> 'matplotlib.axes.Axes':
        """Histogram of the permutation distribution with the observed value marked."""
        from pysimstats.diagnostics.plotting import plot_null_distribution
        kwargs.setdefault('xlabel', self.info.get('statistic', 'statistic'))
        kwargs.setdefault('title', f'Permutation null distribution (R={self.R})')
        return plot_null_distribution(
            self.perm_stats, observed=self.observed_stat, ax=ax, **kwargs
        )

    # --- Display ---

    def summary(self) -> str:
        """Permutation test summary."""
        formula = "(count + 1) / (R + 1)" if self.smoothing else "count / R"
        lines = [
            "\nPERMUTATION TEST",
            "",
            f"Group sizes: {self.info['n1']} and {self.info['n2']}",
            f"Number of permutations: {self.R}",
            f"Observed statistic: {self.observed_stat:.6g}",
            f"Permutations at least as extreme: {self.count}",
            f"p-value ({self.alternative}, {formula}): {self.p_value:.4g}",
            "",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PermutationSolution(R={self.R}, "
            f"observed={self.observed_stat:.4g}, "
            f"p_value={self.p_value:.4g})"
        )

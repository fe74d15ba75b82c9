"""
pysimstats Monte Carlo methods.

Provides sampling recipes, simulated null distributions (by subsampling
an observed population or by parametric normal draws), and permutation
testing.

Usage:
    from pysimstats.montecarlo import simulate_null, permutation_test

    # Null distribution of the t-statistic for n = 10 per group
    sim = simulate_null(population, n=10, R=1000, seed=1)
    sim.qq("norm").max_abs_deviation()

    # Permutation test
    result = permutation_test(smokers, nonsmokers, mean_diff, R=1000)
"""

from pysimstats.montecarlo._common import SampleDraw
from pysimstats.montecarlo._statistics import (
    mean_diff,
    median_diff,
    pooled_df,
    t_pvalue,
    t_stat,
)
from pysimstats.montecarlo.design import PermutationDesign, SimulationDesign
from pysimstats.montecarlo.solution import PermutationSolution, SimulationSolution
from pysimstats.montecarlo.solvers import (
    permutation_test,
    permutation_test_subsample,
    replicate,
    rnorm_like,
    sample,
    sample_mean_difference,
    simulate_null,
    simulate_parametric,
)

__all__ = [
    "sample",
    "sample_mean_difference",
    "replicate",
    "rnorm_like",
    "simulate_null",
    "simulate_parametric",
    "permutation_test",
    "permutation_test_subsample",
    "mean_diff",
    "median_diff",
    "t_stat",
    "t_pvalue",
    "pooled_df",
    "SampleDraw",
    "SimulationDesign",
    "PermutationDesign",
    "SimulationSolution",
    "PermutationSolution",
]

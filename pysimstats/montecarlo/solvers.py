"""
Solver dispatch for Monte Carlo methods.

Provides R-named functions: sample(), replicate(), rnorm_like(), and the
simulation entry points simulate_null(), simulate_parametric(),
permutation_test().
"""

from __future__ import annotations

import logging
from typing import Callable, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysimstats.core.compute.rng import SeedLike, make_rng
from pysimstats.core.exceptions import ValidationError
from pysimstats.core.validation import (
    check_positive_int,
    check_sample_size,
    check_vector,
)
from pysimstats.montecarlo._common import SampleDraw
from pysimstats.montecarlo._statistics import mean_diff, t_stat
from pysimstats.montecarlo.backends.cpu import (
    CPUPermutationBackend,
    CPUSimulationBackend,
)
from pysimstats.montecarlo.design import PermutationDesign, SimulationDesign
from pysimstats.montecarlo.solution import PermutationSolution, SimulationSolution

logger = logging.getLogger(__name__)

BackendChoice = Literal['cpu']


def _get_backend(kind: str, backend: str = 'cpu'):
    """Select the backend for a simulation kind. Only CPU is provided."""
    if backend not in ('cpu', 'auto'):
        raise ValidationError(f"Unknown backend: {backend!r}. Use 'cpu'.")
    if kind == 'simulation':
        return CPUSimulationBackend()
    return CPUPermutationBackend()


# ---------------------------------------------------------------------------
# Sampling recipes
# ---------------------------------------------------------------------------

def sample(
    population: ArrayLike,
    n: int,
    *,
    replace: bool = False,
    seed: SeedLike = None,
) -> NDArray:
    """
    Draw n values from population. Matches R sample(x, n).

    Raises:
        SampleSizeError: If n exceeds the population without replacement
    """
    pop = check_vector(population, "population")
    n = check_positive_int(n, "n")
    check_sample_size(n, len(pop), "population", replace=replace)
    return make_rng(seed).choice(pop, size=n, replace=replace)


def sample_mean_difference(
    x_population: ArrayLike,
    y_population: ArrayLike,
    n: int,
    *,
    seed: SeedLike = None,
) -> SampleDraw:
    """
    Draw n values without replacement from each population and compare means.

    Both draws use one Generator, x first, so a seed fixes the pair.
    """
    rng = make_rng(seed)
    x = sample(x_population, n, seed=rng)
    y = sample(y_population, n, seed=rng)
    return SampleDraw(x=x, y=y, difference=mean_diff(x, y))


def replicate(
    R: int,
    fn: Callable[[np.random.Generator], float],
    *,
    seed: SeedLike = None,
) -> NDArray[np.floating]:
    """
    Evaluate fn R times and collect the results. Matches R replicate().

    fn receives the shared Generator, so the whole sequence is
    reproducible from one seed.
    """
    R = check_positive_int(R, "R")
    rng = make_rng(seed)
    out = np.empty(R, dtype=np.float64)
    for b in range(R):
        out[b] = fn(rng)
    return out


def rnorm_like(
    x: ArrayLike,
    size: int,
    *,
    seed: SeedLike = None,
) -> NDArray[np.floating]:
    """
    Synthetic data from Normal(mean(x), sd(x)).

    The parametric stand-in for an observed population; sd uses ddof=1.
    """
    arr = check_vector(x, "x", min_samples=2)
    size = check_positive_int(size, "size")
    mean, sd = float(np.mean(arr)), float(np.std(arr, ddof=1))
    return make_rng(seed).normal(mean, sd, size=size)


# ---------------------------------------------------------------------------
# Null-distribution simulation
# ---------------------------------------------------------------------------

def simulate_null(
    population: ArrayLike | SimulationDesign,
    n: int | None = None,
    *,
    R: int = 1000,
    statistic: Callable = t_stat,
    seed: SeedLike = None,
    backend: BackendChoice = 'cpu',
) -> SimulationSolution:
    """
    Simulate a statistic's null distribution by subsampling one population.

    Each replicate draws two independent samples of size n without
    replacement from population and evaluates statistic on them.

    Parameters
    ----------
    population : array-like or SimulationDesign
        Observed values (e.g. nonsmoker birth weights).
    n : int
        Per-group sample size.
    R : int
        Number of replicates. Default 1000.
    statistic : callable
        fn(x, y) -> float. Default t_stat.
    seed : int, Generator or None
        Random seed.

    Returns
    -------
    SimulationSolution
    """
    if isinstance(population, SimulationDesign):
        design = population
    else:
        if n is None:
            raise ValueError("n is required unless a SimulationDesign is given")
        design = SimulationDesign.for_population(
            population, n, R, statistic=statistic, seed=seed,
        )

    logger.info("Simulating null distribution: sim=%s, n=%d, R=%d",
                design.sim, design.n, design.R)
    result = _get_backend('simulation', backend).solve(design)
    return SimulationSolution(_result=result, _design=design)


def simulate_parametric(
    mean: float,
    sd: float,
    n: int,
    *,
    R: int = 1000,
    statistic: Callable = t_stat,
    seed: SeedLike = None,
    backend: BackendChoice = 'cpu',
) -> SimulationSolution:
    """
    Simulate a statistic's null distribution with both groups drawn
    from Normal(mean, sd).

    Use SimulationDesign.for_parametric_from_sample() to take the
    parameters from an observed sample.
    """
    design = SimulationDesign.for_parametric(
        mean, sd, n, R, statistic=statistic, seed=seed,
    )
    return simulate_null(design, backend=backend)


# ---------------------------------------------------------------------------
# Permutation test
# ---------------------------------------------------------------------------

def permutation_test(
    x: ArrayLike | PermutationDesign,
    y: ArrayLike | None = None,
    statistic: Callable = mean_diff,
    R: int = 1000,
    *,
    alternative: Literal["two.sided", "less", "greater"] = "two.sided",
    smoothing: bool = True,
    seed: SeedLike = None,
    backend: BackendChoice = 'cpu',
) -> PermutationSolution:
    """
    Two-sample permutation test.

    Pools x and y, reshuffles the pooled values R times, splits each
    shuffle back into groups of the original sizes, and recomputes the
    statistic.

    Parameters
    ----------
    x, y : array-like
        The two groups. x may instead be a PermutationDesign.
    statistic : callable
        fn(x, y) -> float. Default mean_diff.
    R : int
        Number of permutations. Default 1000.
    alternative : str
        "two.sided" (|perm| >= |obs|), "greater" (perm >= obs) or
        "less" (perm <= obs).
    smoothing : bool
        If True (default) p = (count + 1) / (R + 1), which never returns
        exactly zero; otherwise p = count / R.
    seed : int, Generator or None
        Random seed.

    Returns
    -------
    PermutationSolution
    """
    if isinstance(x, PermutationDesign):
        design = x
    else:
        if y is None:
            raise ValueError("y is required unless a PermutationDesign is given")
        design = PermutationDesign.for_permutation_test(
            x, y, statistic, R,
            alternative=alternative,
            smoothing=smoothing,
            seed=seed,
        )

    result = _get_backend('permutation', backend).solve(design)
    return PermutationSolution(_result=result, _design=design)


def permutation_test_subsample(
    x_population: ArrayLike,
    y_population: ArrayLike,
    n: int,
    statistic: Callable = mean_diff,
    R: int = 1000,
    *,
    alternative: Literal["two.sided", "less", "greater"] = "two.sided",
    smoothing: bool = True,
    seed: SeedLike = None,
) -> PermutationSolution:
    """
    Draw n values from each population, then permutation-test the draws.

    One Generator drives both the subsampling and the shuffles.
    """
    rng = make_rng(seed)
    draw = sample_mean_difference(x_population, y_population, n, seed=rng)
    return permutation_test(
        draw.x, draw.y, statistic, R,
        alternative=alternative, smoothing=smoothing, seed=rng,
    )

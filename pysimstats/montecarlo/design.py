"""
Design classes for Monte Carlo methods.

SimulationDesign and PermutationDesign encapsulate all inputs needed
by backends. Immutable, validated at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pysimstats.core.compute.rng import SeedLike
from pysimstats.core.validation import check_sample_size, check_vector
from pysimstats.montecarlo._common import VALID_ALTERNATIVES
from pysimstats.montecarlo._statistics import t_stat


def _check_replicates(R: int) -> None:
    if isinstance(R, bool) or not isinstance(R, (int, np.integer)):
        raise ValueError(f"R must be an integer, got {type(R).__name__}")
    if R < 1:
        raise ValueError(f"R must be >= 1, got {R}")


def _check_group_size(n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise ValueError(f"n must be an integer, got {type(n).__name__}")
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")


@dataclass(frozen=True)
class SimulationDesign:
    """
    Frozen design for simulating a statistic's null distribution.

    Each replicate draws two independent samples of size n and applies
    the statistic to them. Both samples come from the same source, so
    the null hypothesis holds by construction.

    Attributes:
        sim: "population" (sample without replacement from an observed
            population) or "parametric" (draw from Normal(mean, sd)).
        population: Observed population for sim="population", else None.
        mean: Normal mean for sim="parametric", else None.
        sd: Normal standard deviation for sim="parametric", else None.
        n: Per-group sample size.
        R: Number of replicates.
        statistic: fn(x, y) -> float.
        seed: Seed or Generator for reproducibility.
    """
    sim: str
    population: NDArray[np.floating[Any]] | None
    mean: float | None
    sd: float | None
    n: int
    R: int
    statistic: Callable
    seed: SeedLike

    @classmethod
    def for_population(
        cls,
        population: ArrayLike,
        n: int,
        R: int = 1000,
        *,
        statistic: Callable = t_stat,
        seed: SeedLike = None,
    ) -> SimulationDesign:
        """
        Create a design that subsamples an observed population.

        Raises:
            ValueError: If n or R is invalid
            ValidationError: If population is not a finite 1D sample
            SampleSizeError: If n exceeds the population size
        """
        pop = check_vector(population, "population")
        _check_group_size(n)
        _check_replicates(R)
        check_sample_size(n, len(pop), "population")
        return cls(
            sim="population",
            population=pop,
            mean=None,
            sd=None,
            n=int(n),
            R=int(R),
            statistic=statistic,
            seed=seed,
        )

    @classmethod
    def for_parametric(
        cls,
        mean: float,
        sd: float,
        n: int,
        R: int = 1000,
        *,
        statistic: Callable = t_stat,
        seed: SeedLike = None,
    ) -> SimulationDesign:
        """
        Create a design that draws both samples from Normal(mean, sd).

        Raises:
            ValueError: If n, R, mean or sd is invalid
        """
        _check_group_size(n)
        _check_replicates(R)
        if not np.isfinite(mean):
            raise ValueError(f"mean must be finite, got {mean}")
        if not np.isfinite(sd) or sd <= 0:
            raise ValueError(f"sd must be finite and > 0, got {sd}")
        return cls(
            sim="parametric",
            population=None,
            mean=float(mean),
            sd=float(sd),
            n=int(n),
            R=int(R),
            statistic=statistic,
            seed=seed,
        )

    @classmethod
    def for_parametric_from_sample(
        cls,
        sample: ArrayLike,
        n: int,
        R: int = 1000,
        *,
        statistic: Callable = t_stat,
        seed: SeedLike = None,
    ) -> SimulationDesign:
        """
        Parametric design using a sample's mean and SD (ddof=1) as the
        normal parameters.
        """
        x = check_vector(sample, "sample", min_samples=2)
        return cls.for_parametric(
            float(np.mean(x)), float(np.std(x, ddof=1)), n, R,
            statistic=statistic, seed=seed,
        )


@dataclass(frozen=True)
class PermutationDesign:
    """
    Frozen design for permutation testing.

    Attributes:
        x: Group 1 data, shape (n1,).
        y: Group 2 data, shape (n2,).
        statistic: fn(x, y) -> float.
        R: Number of permutations.
        alternative: "two.sided", "less", or "greater".
        smoothing: Use (count + 1) / (R + 1) rather than count / R.
        seed: Seed or Generator for reproducibility.
    """
    x: NDArray[np.floating[Any]]
    y: NDArray[np.floating[Any]]
    statistic: Callable
    R: int
    alternative: str
    smoothing: bool
    seed: SeedLike

    @classmethod
    def for_permutation_test(
        cls,
        x,
        y,
        statistic: Callable,
        R: int = 1000,
        *,
        alternative: str = "two.sided",
        smoothing: bool = True,
        seed: SeedLike = None,
    ) -> PermutationDesign:
        """
        Create a permutation test design with validation.

        Args:
            x: Group 1 data.
            y: Group 2 data.
            statistic: fn(x, y) -> float. The test statistic.
            R: Number of permutations. Must be >= 1.
            alternative: "two.sided", "less", or "greater".
            smoothing: Add one to numerator and denominator of the p-value.
            seed: Seed or Generator.

        Returns:
            Validated PermutationDesign.
        """
        x_arr = np.asarray(x, dtype=np.float64).copy()
        y_arr = np.asarray(y, dtype=np.float64).copy()

        if x_arr.ndim == 0 or y_arr.ndim == 0:
            raise ValueError("x and y must be arrays, not scalars")

        if x_arr.ndim != 1 or y_arr.ndim != 1:
            raise ValueError(
                f"x and y must be 1D, got {x_arr.ndim}D and {y_arr.ndim}D"
            )

        if len(x_arr) < 1 or len(y_arr) < 1:
            raise ValueError("x and y must each have at least 1 observation")

        if not (np.all(np.isfinite(x_arr)) and np.all(np.isfinite(y_arr))):
            raise ValueError("x and y must not contain NaN or Inf")

        _check_replicates(R)

        if alternative not in VALID_ALTERNATIVES:
            raise ValueError(
                f"alternative must be 'two.sided', 'less', or 'greater', "
                f"got {alternative!r}"
            )

        return cls(
            x=x_arr,
            y=y_arr,
            statistic=statistic,
            R=int(R),
            alternative=alternative,
            smoothing=bool(smoothing),
            seed=seed,
        )

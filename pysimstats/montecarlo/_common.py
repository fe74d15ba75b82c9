"""
Common data structures for Monte Carlo methods.

SimulationParams and PermutationParams are the parameter payloads
wrapped by Result[P] and exposed through Solution classes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


VALID_ALTERNATIVES = ("two.sided", "less", "greater")
VALID_SIMS = ("population", "parametric")


@dataclass(frozen=True)
class SampleDraw:
    """
    One draw of two samples and the difference of their means.
    """
    x: NDArray[np.floating[Any]]
    y: NDArray[np.floating[Any]]
    difference: float


@dataclass(frozen=True)
class SimulationParams:
    """
    Parameter payload for a simulated null distribution.

    - stats: statistic from each replicate, NaN where undefined
    - n: per-group sample size of each replicate
    - sim: "population" (subsamples of observed data) or
      "parametric" (draws from a normal distribution)
    """
    stats: NDArray[np.floating[Any]]           # shape (R,)
    R: int
    n: int
    sim: str
    statistic_name: str


@dataclass(frozen=True)
class PermutationParams:
    """
    Parameter payload for permutation test results.

    - observed_stat: test statistic on original (unpermuted) data
    - perm_stats: test statistics from R permutations
    - count: permutations at least as extreme as observed_stat
    - p_value: (count + 1) / (R + 1) when smoothing, else count / R
    """
    observed_stat: float
    perm_stats: NDArray[np.floating[Any]]      # shape (R,)
    count: int
    p_value: float
    R: int
    alternative: str                            # "two.sided" | "less" | "greater"
    smoothing: bool

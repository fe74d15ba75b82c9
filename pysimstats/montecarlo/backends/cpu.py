"""
CPU backends for null-distribution simulation and permutation test.

CPUSimulationBackend: Population subsampling and parametric (normal) draws.
CPUPermutationBackend: Permutation test with optional +1 smoothing.
"""

from __future__ import annotations

import logging
import warnings

import numpy as np

from pysimstats.core.result import Result
from pysimstats.core.compute.rng import make_rng
from pysimstats.core.compute.timing import Timer
from pysimstats.core.exceptions import NumericalError
from pysimstats.montecarlo._common import PermutationParams, SimulationParams
from pysimstats.montecarlo._statistics import statistic_name
from pysimstats.montecarlo.design import PermutationDesign, SimulationDesign

logger = logging.getLogger(__name__)


class CPUSimulationBackend:
    """
    CPU backend for simulating a statistic under the null.

    Every replicate draws two fresh samples of size n from the same
    source and records statistic(x, y).
    """

    @property
    def name(self) -> str:
        return 'cpu_simulation'

    def solve(self, design: SimulationDesign) -> Result[SimulationParams]:
        """Run the simulation and return Result[SimulationParams]."""
        timer = Timer()
        timer.start()

        R = design.R
        n = design.n
        statistic = design.statistic
        rng = make_rng(design.seed)

        logger.debug("Simulating %d %s replicates with n=%d", R, design.sim, n)

        stats = np.empty(R, dtype=np.float64)
        with timer.section('replicates'):
            if design.sim == "population":
                population = design.population
                for b in range(R):
                    x = rng.choice(population, size=n, replace=False)
                    y = rng.choice(population, size=n, replace=False)
                    stats[b] = statistic(x, y)
            elif design.sim == "parametric":
                mean, sd = design.mean, design.sd
                for b in range(R):
                    x = rng.normal(mean, sd, size=n)
                    y = rng.normal(mean, sd, size=n)
                    stats[b] = statistic(x, y)
            else:
                raise ValueError(f"Unknown sim: {design.sim!r}")

        warnings_list: list[str] = []
        n_undefined = int(np.sum(~np.isfinite(stats)))
        if n_undefined == R:
            raise NumericalError(
                f"statistic was undefined in all {R} replicates "
                f"(samples of size {n} are constant)",
                quantity=statistic_name(statistic),
            )
        if n_undefined:
            msg = (
                f"statistic undefined in {n_undefined} of {R} replicates "
                f"(zero standard error); those replicates are NaN"
            )
            warnings_list.append(msg)
            warnings.warn(msg, RuntimeWarning, stacklevel=3)

        timer.stop()

        params = SimulationParams(
            stats=stats,
            R=R,
            n=n,
            sim=design.sim,
            statistic_name=statistic_name(statistic),
        )

        info = {'sim': design.sim, 'n': n, 'n_undefined': n_undefined}
        if design.sim == "population":
            info['population_size'] = len(design.population)
        else:
            info['mean'] = design.mean
            info['sd'] = design.sd

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


class CPUPermutationBackend:
    """
    CPU backend for permutation testing.

    Shuffles combined data and computes test statistic R times.
    P-value is (count + 1) / (R + 1) with smoothing, count / R without.
    Permutations where the statistic is undefined (NaN) are left out, so
    R in those formulas counts only defined permutations.
    """

    @property
    def name(self) -> str:
        return 'cpu_permutation'

    def solve(self, design: PermutationDesign) -> Result[PermutationParams]:
        """Run permutation test and return Result[PermutationParams]."""
        timer = Timer()
        timer.start()

        x = design.x
        y = design.y
        statistic = design.statistic
        R = design.R
        alternative = design.alternative

        rng = make_rng(design.seed)

        with timer.section('observed_stat'):
            observed = float(statistic(x, y))
        if not np.isfinite(observed):
            raise NumericalError(
                f"observed statistic is undefined ({observed}), so there is "
                f"nothing to compare the permutations against",
                quantity=statistic_name(statistic),
            )

        with timer.section('permutation_replicates'):
            combined = np.concatenate([x, y])
            n1 = len(x)
            perm_stats = np.empty(R, dtype=np.float64)

            for b in range(R):
                shuffled = rng.permutation(combined)
                perm_stats[b] = statistic(
                    shuffled[:n1], shuffled[n1:]
                )

        warnings_list: list[str] = []
        defined = np.isfinite(perm_stats)
        n_undefined = int(R - np.sum(defined))
        if n_undefined == R:
            raise NumericalError(
                f"statistic was undefined in all {R} permutations",
                quantity=statistic_name(statistic),
            )
        if n_undefined:
            msg = (
                f"statistic undefined in {n_undefined} of {R} permutations; "
                f"those are left out of the p-value"
            )
            warnings_list.append(msg)
            warnings.warn(msg, RuntimeWarning, stacklevel=3)
        valid = perm_stats[defined]
        n_valid = len(valid)

        with timer.section('p_value'):
            if alternative == "two.sided":
                count = int(np.sum(np.abs(valid) >= np.abs(observed)))
            elif alternative == "greater":
                count = int(np.sum(valid >= observed))
            elif alternative == "less":
                count = int(np.sum(valid <= observed))
            else:
                raise ValueError(f"Unknown alternative: {alternative!r}")

            if design.smoothing:
                p_value = float(count + 1) / float(n_valid + 1)
            else:
                p_value = float(count) / float(n_valid)

        timer.stop()

        logger.debug(
            "Permutation test: observed=%.6g, %d/%d extreme, p=%.4g",
            observed, count, n_valid, p_value,
        )

        params = PermutationParams(
            observed_stat=observed,
            perm_stats=perm_stats,
            count=count,
            p_value=p_value,
            R=R,
            alternative=alternative,
            smoothing=design.smoothing,
        )

        return Result(
            params=params,
            info={
                'n1': len(x),
                'n2': len(y),
                'alternative': alternative,
                'statistic': statistic_name(statistic),
                'n_undefined': n_undefined,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )

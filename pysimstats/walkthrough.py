"""
Monte Carlo and permutation walkthrough on the birth-weight data.

Runs the demonstrations in order, all driven by one seeded Generator:

    1. load the table, split birth weights by smoking status
    2. one random subsample per group and their mean difference
    3. null distribution of the t-statistic by subsampling nonsmokers,
       compared to the normal (n = 10) and to t (n = 3) by QQ
    4. parametric simulation from the nonsmokers' mean and SD
    5. permutation test of smokers vs nonsmokers on subsamples

Usage:
    python -m pysimstats --data babies.txt --seed 1 --figures figs/
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pysimstats.core._logging import configure_logging
from pysimstats.core.compute import make_rng, timed
from pysimstats.core.config import DEFAULTS, SimulationDefaults
from pysimstats.core.exceptions import PySimStatsError
from pysimstats.datasets import load_babies, smoking_groups
from pysimstats.diagnostics import QQSolution, midpoints, qqnorm, qqplot
from pysimstats.montecarlo import (
    PermutationSolution,
    SampleDraw,
    SimulationSolution,
    permutation_test_subsample,
    sample_mean_difference,
    simulate_null,
    simulate_parametric,
)

logger = logging.getLogger(__name__)


@dataclass
class WalkthroughReport:
    """Everything the walkthrough computed, step by step."""
    config: SimulationDefaults
    n_records: int
    nonsmokers: NDArray[np.floating[Any]]
    smokers: NDArray[np.floating[Any]]
    draw: SampleDraw
    population_qq: QQSolution
    null_sim: SimulationSolution
    null_qq: QQSolution
    small_sim: SimulationSolution
    small_qq_norm: QQSolution
    small_qq_t: QQSolution
    synthetic: NDArray[np.floating[Any]]
    synthetic_qq: QQSolution
    parametric_sim: SimulationSolution
    permutation: PermutationSolution
    figures: list[Path] = field(default_factory=list)

    def summary(self) -> str:
        cfg = self.config
        lines = [
            "\nBIRTH WEIGHT: MONTE CARLO AND PERMUTATION WALKTHROUGH",
            "",
            f"Records: {self.n_records}    nonsmokers: {len(self.nonsmokers)}    "
            f"smokers: {len(self.smokers)}    seed: {cfg.seed}",
            f"Population means: nonsmokers {np.mean(self.nonsmokers):.2f}, "
            f"smokers {np.mean(self.smokers):.2f}",
            "",
            f"[1] One draw of n={cfg.sample_size} per group: "
            f"mean difference {self.draw.difference:.3f}",
            f"[2] Nonsmoker birth weights vs normal: "
            f"quantile correlation {self.population_qq.correlation():.4f}",
            self.null_sim.summary(),
            f"    vs normal: max QQ deviation {self.null_qq.max_abs_deviation():.3f}",
            self.small_sim.summary(),
            f"    vs normal: max QQ deviation {self.small_qq_norm.max_abs_deviation():.3f}",
            f"    vs t({self.small_sim.df:g}): max QQ deviation "
            f"{self.small_qq_t.max_abs_deviation():.3f}",
            "",
            f"[3] Synthetic nonsmokers ~ Normal({self.parametric_sim.info['mean']:.2f}, "
            f"{self.parametric_sim.info['sd']:.2f}): quantile correlation with "
            f"observed {self.synthetic_qq.correlation():.4f}",
            self.parametric_sim.summary(),
            self.permutation.summary(),
        ]
        if self.figures:
            lines.append("Figures:")
            lines.extend(f"  {p}" for p in self.figures)
        return "\n".join(lines)


def run_walkthrough(
    path: str | Path | None = None,
    *,
    config: SimulationDefaults = DEFAULTS,
    figures_dir: str | Path | None = None,
) -> WalkthroughReport:
    """
    Run every demonstration once and collect the results.

    Args:
        path: Birth-weight table; defaults to config.data_path.
        config: Seed, replicate count and sample sizes.
        figures_dir: If given, PNG figures are written there
            (requires matplotlib).

    Raises:
        FileNotFoundError: If the data file does not exist
        PySimStatsError: If the data or settings are unusable
    """
    path = Path(path if path is not None else config.data_path)
    rng = make_rng(config.seed)
    R = config.replicates

    babies = load_babies(path)
    nonsmokers, smokers = smoking_groups(babies)

    draw = sample_mean_difference(nonsmokers, smokers, config.sample_size, seed=rng)
    population_qq = qqnorm(nonsmokers)

    logger.info("Simulating t-statistics under the null (n=%d, R=%d)",
                config.sample_size, R)
    with timed("null simulation", logger):
        null_sim = simulate_null(nonsmokers, config.sample_size, R=R, seed=rng)
    null_qq = null_sim.qq("norm")

    with timed("small-sample null simulation", logger):
        small_sim = simulate_null(nonsmokers, config.small_sample_size, R=R, seed=rng)
    small_qq_norm = small_sim.qq("norm")
    small_qq_t = small_sim.qq("t", probs=midpoints(len(small_sim.finite_stats)))

    mean = config.parametric_mean
    sd = config.parametric_sd
    if mean is None:
        mean = float(np.mean(nonsmokers))
    if sd is None:
        sd = float(np.std(nonsmokers, ddof=1))
    synthetic = rng.normal(mean, sd, size=len(nonsmokers))
    synthetic_qq = qqplot(nonsmokers, synthetic)
    logger.info("Parametric simulation from Normal(%.2f, %.2f)", mean, sd)
    with timed("parametric simulation", logger):
        parametric_sim = simulate_parametric(
            mean, sd, config.small_sample_size, R=R, seed=rng,
        )

    logger.info("Permutation test on n=%d subsamples", config.permutation_sample_size)
    with timed("permutation test", logger):
        permutation = permutation_test_subsample(
            smokers, nonsmokers, config.permutation_sample_size, R=R,
            smoothing=config.smoothing, seed=rng,
        )

    report = WalkthroughReport(
        config=config,
        n_records=babies.n_observations,
        nonsmokers=nonsmokers,
        smokers=smokers,
        draw=draw,
        population_qq=population_qq,
        null_sim=null_sim,
        null_qq=null_qq,
        small_sim=small_sim,
        small_qq_norm=small_qq_norm,
        small_qq_t=small_qq_t,
        synthetic=synthetic,
        synthetic_qq=synthetic_qq,
        parametric_sim=parametric_sim,
        permutation=permutation,
    )

    if figures_dir is not None:
        report.figures = save_figures(report, figures_dir)
    return report


def save_figures(report: WalkthroughReport, figures_dir: str | Path) -> list[Path]:
    """Write one PNG per plot in the walkthrough. Requires matplotlib."""
    from pysimstats.diagnostics.plotting import save_figure

    out = Path(figures_dir)
    out.mkdir(parents=True, exist_ok=True)

    plots = {
        "population_qqnorm.png": lambda: report.population_qq.plot(line=True, identity=False),
        "null_tstat_hist.png": lambda: report.null_sim.plot(),
        "null_tstat_qqnorm.png": lambda: report.null_qq.plot(),
        "small_tstat_qqnorm.png": lambda: report.small_qq_norm.plot(),
        "small_tstat_qqt.png": lambda: report.small_qq_t.plot(),
        "synthetic_qqplot.png": lambda: report.synthetic_qq.plot(),
        "parametric_tstat_hist.png": lambda: report.parametric_sim.plot(),
        "permutation_hist.png": lambda: report.permutation.plot(),
    }
    written = []
    for name, draw in plots.items():
        target = out / name
        save_figure(draw(), target)
        written.append(target)
    logger.info("Wrote %d figures to %s", len(written), out)
    return written


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pysimstats",
        description="Monte Carlo and permutation walkthrough on birth-weight data",
    )
    parser.add_argument("--data", default=None,
                        help=f"birth-weight table (default: {DEFAULTS.data_path})")
    parser.add_argument("--seed", type=int, default=None,
                        help=f"random seed (default: {DEFAULTS.seed})")
    parser.add_argument("--replicates", "-R", type=int, default=None,
                        help=f"replicates per simulation (default: {DEFAULTS.replicates})")
    parser.add_argument("--figures", default=None,
                        help="directory for PNG figures (requires matplotlib)")
    parser.add_argument("--no-smoothing", action="store_true",
                        help="use count / R for the permutation p-value")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="-v for progress, -vv for debug output")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    configure_logging(level)

    if args.figures is not None:
        try:
            import matplotlib
        except ImportError as e:
            print(f"pysimstats: error: --figures needs matplotlib "
                  f"(pip install 'pysimstats[plot]'): {e}", file=sys.stderr)
            return 1
        matplotlib.use("Agg")

    try:
        config = DEFAULTS.with_overrides(
            seed=args.seed,
            replicates=args.replicates,
            data_path=args.data,
            smoothing=False if args.no_smoothing else None,
        )
        report = run_walkthrough(config=config, figures_dir=args.figures)
    except (FileNotFoundError, PySimStatsError) as e:
        print(f"pysimstats: error: {e}", file=sys.stderr)
        return 1

    print(report.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
pysimstats: Monte Carlo simulation and permutation testing for teaching.

Reproducible, seeded versions of the classroom demonstrations: random
subsampling, simulated null distributions of the t-statistic, QQ
comparisons against normal and t references, parametric simulation,
and permutation tests.

Submodules:
    core: DataSource, Result envelope, exceptions, configuration
    datasets: Birth-weight data loading
    montecarlo: Sampling, null simulation, permutation tests
    diagnostics: QQ comparisons and plotting
    walkthrough: The full demonstration, also runnable as a CLI
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from pysimstats import core
from pysimstats import datasets
from pysimstats import diagnostics
from pysimstats import montecarlo

__all__ = [
    "__version__",
    "core",
    "datasets",
    "diagnostics",
    "montecarlo",
]

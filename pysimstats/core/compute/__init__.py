"""
Shared compute infrastructure for pysimstats.

Domain-specific backends live in {domain}/backends/. This module holds
the pieces they all share.

Submodules:
    timing: Execution timing utilities
    rng: Seeded random number generator construction
"""

from pysimstats.core.compute.rng import SeedLike, make_rng
from pysimstats.core.compute.timing import Timer, timed

__all__ = [
    "SeedLike",
    "make_rng",
    "Timer",
    "timed",
]

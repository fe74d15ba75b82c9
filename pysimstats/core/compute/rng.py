"""
Random number generator construction.

All randomness in pysimstats flows through numpy Generators built here.
Passing the same integer seed reproduces a run exactly; passing an
existing Generator threads one stream through several recipes, the way
a script seeds once and then samples repeatedly.
"""

from __future__ import annotations

import numpy as np

from pysimstats.core.exceptions import ValidationError

SeedLike = int | np.random.Generator | None


def make_rng(seed: SeedLike = None) -> np.random.Generator:
    """
    Return a Generator for the given seed.

    Args:
        seed: None (fresh entropy), a non-negative int, or an existing
            Generator, which is returned unchanged.

    Raises:
        ValidationError: If seed is of an unsupported type or negative
    """
    if isinstance(seed, np.random.Generator):
        return seed
    if seed is None:
        return np.random.default_rng()
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise ValidationError(
            f"seed: expected None, int or numpy Generator, got {type(seed).__name__}"
        )
    if seed < 0:
        raise ValidationError(f"seed: must be non-negative, got {seed}")
    return np.random.default_rng(int(seed))

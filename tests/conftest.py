"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pysimstats.datasets import BABIES_COLUMNS

N_NONSMOKERS = 120
N_SMOKERS = 80
N_UNKNOWN = 5


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


def _write_babies(path, seed=7):
    """Write a small birth-weight table in the whitespace-delimited format."""
    gen = np.random.default_rng(seed)
    smoke = np.concatenate([
        np.zeros(N_NONSMOKERS, dtype=int),
        np.ones(N_SMOKERS, dtype=int),
        np.full(N_UNKNOWN, 9, dtype=int),
    ])
    gen.shuffle(smoke)
    n = len(smoke)
    bwt = np.where(smoke == 1,
                   gen.normal(114.0, 18.0, n),
                   gen.normal(123.0, 17.0, n)).round(1)
    gestation = gen.normal(279.0, 16.0, n).round()
    parity = gen.integers(0, 2, n)
    age = gen.integers(17, 45, n)
    height = gen.normal(64.0, 2.5, n).round()
    weight = gen.normal(128.0, 20.0, n).round()

    lines = [" ".join(BABIES_COLUMNS)]
    for row in zip(bwt, gestation, parity, age, height, weight, smoke):
        lines.append("  ".join(str(v) for v in row))
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def babies_file(tmp_path):
    """Path to a synthetic babies.txt with 120 nonsmokers, 80 smokers, 5 unknown."""
    return _write_babies(tmp_path / "babies.txt")

"""
Tests for the matplotlib figures. Skipped when matplotlib is not installed.
"""

from __future__ import annotations

import numpy as np
import pytest

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

from pysimstats.diagnostics import qqnorm  # noqa: E402
from pysimstats.diagnostics.plotting import (  # noqa: E402
    plot_null_distribution,
    plot_qq,
    save_figure,
)
from pysimstats.montecarlo import permutation_test  # noqa: E402


def test_plot_qq_labels(rng):
    ax = plot_qq(qqnorm(rng.normal(size=30)), line=True)
    assert ax.get_xlabel() == "Normal quantiles"
    assert ax.get_ylabel() == "Sample quantiles"
    assert len(ax.get_lines()) == 2
    matplotlib.pyplot.close(ax.get_figure())


def test_plot_null_distribution_marks_observed(rng):
    ax = plot_null_distribution(rng.normal(size=500), observed=1.5, title="Null")
    assert ax.get_title() == "Null"
    assert any(np.allclose(line.get_xdata(), 1.5) for line in ax.get_lines())
    matplotlib.pyplot.close(ax.get_figure())


def test_solution_plot_and_save(tmp_path):
    result = permutation_test([1.0, 2.0, 3.0], [4.0, 5.0, 6.0], R=50, seed=1)
    path = tmp_path / "perm.png"
    save_figure(result.plot(), path)
    assert path.exists()
    assert path.stat().st_size > 0

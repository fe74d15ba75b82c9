"""
End-to-end tests for the birth-weight walkthrough and its command line.
"""

import sys

import numpy as np
import pytest

from pysimstats.core.config import DEFAULTS
from pysimstats.core.exceptions import SampleSizeError
from pysimstats.walkthrough import build_parser, main, run_walkthrough


@pytest.fixture
def config():
    return DEFAULTS.with_overrides(replicates=200)


class TestRunWalkthrough:

    def test_report_contents(self, babies_file, config):
        report = run_walkthrough(babies_file, config=config)

        assert report.n_records == 205
        assert len(report.nonsmokers) == 120
        assert len(report.smokers) == 80
        assert report.draw.x.shape == (config.sample_size,)
        assert report.null_sim.R == 200
        assert report.null_sim.n == config.sample_size
        assert report.small_sim.n == config.small_sample_size
        assert report.small_qq_t.distribution == "t"
        assert report.small_qq_t.df == 2 * config.small_sample_size - 2
        assert report.synthetic.shape == (120,)
        assert report.parametric_sim.sim == "parametric"
        assert report.permutation.info["n1"] == config.permutation_sample_size
        assert 0.0 < report.permutation.p_value <= 1.0
        assert report.figures == []

    def test_parametric_defaults_to_nonsmoker_moments(self, babies_file, config):
        report = run_walkthrough(babies_file, config=config)
        info = report.parametric_sim.info
        assert info["mean"] == pytest.approx(np.mean(report.nonsmokers))
        assert info["sd"] == pytest.approx(np.std(report.nonsmokers, ddof=1))

    def test_parametric_override(self, babies_file, config):
        cfg = config.with_overrides(parametric_mean=100.0, parametric_sd=5.0)
        report = run_walkthrough(babies_file, config=cfg)
        assert report.parametric_sim.info["mean"] == 100.0
        assert report.parametric_sim.info["sd"] == 5.0

    def test_synthetic_sample_uses_parametric_override(self, babies_file, config):
        cfg = config.with_overrides(parametric_mean=100.0, parametric_sd=5.0)
        report = run_walkthrough(babies_file, config=cfg)
        assert np.mean(report.synthetic) == pytest.approx(100.0, abs=2.0)
        assert np.std(report.synthetic, ddof=1) == pytest.approx(5.0, rel=0.25)
        assert "Normal(100.00, 5.00)" in report.summary()

    def test_reproducible(self, babies_file, config):
        a = run_walkthrough(babies_file, config=config)
        b = run_walkthrough(babies_file, config=config)
        np.testing.assert_array_equal(a.null_sim.stats, b.null_sim.stats)
        assert a.permutation.p_value == b.permutation.p_value

    def test_seed_changes_results(self, babies_file, config):
        a = run_walkthrough(babies_file, config=config)
        b = run_walkthrough(babies_file, config=config.with_overrides(seed=2))
        assert not np.allclose(a.null_sim.stats, b.null_sim.stats)

    def test_summary_sections(self, babies_file, config):
        s = run_walkthrough(babies_file, config=config).summary()
        assert "BIRTH WEIGHT: MONTE CARLO AND PERMUTATION WALKTHROUGH" in s
        assert "POPULATION NULL SIMULATION" in s
        assert "PARAMETRIC NULL SIMULATION" in s
        assert "PERMUTATION TEST" in s

    def test_permutation_sample_too_large(self, babies_file, config):
        cfg = config.with_overrides(permutation_sample_size=500)
        with pytest.raises(SampleSizeError):
            run_walkthrough(babies_file, config=cfg)

    def test_missing_file(self, tmp_path, config):
        with pytest.raises(FileNotFoundError):
            run_walkthrough(tmp_path / "missing.txt", config=config)

    def test_figures(self, babies_file, config, tmp_path):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        report = run_walkthrough(babies_file, config=config,
                                 figures_dir=tmp_path / "figs")
        assert len(report.figures) == 8
        assert all(p.exists() for p in report.figures)
        assert "Figures:" in report.summary()


class TestMain:

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.seed is None
        assert args.replicates is None
        assert args.no_smoothing is False

    def test_success(self, babies_file, capsys):
        code = main(["--data", str(babies_file), "-R", "100", "--seed", "3"])
        out = capsys.readouterr().out
        assert code == 0
        assert "PERMUTATION TEST" in out
        assert "seed: 3" in out

    def test_no_smoothing(self, babies_file, capsys):
        main(["--data", str(babies_file), "-R", "100", "--no-smoothing"])
        assert "count / R" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        code = main(["--data", str(tmp_path / "nope.txt")])
        assert code == 1
        assert "error" in capsys.readouterr().err

    def test_invalid_replicates(self, babies_file, capsys):
        code = main(["--data", str(babies_file), "-R", "0"])
        assert code == 1
        assert "replicates" in capsys.readouterr().err

    def test_figures_without_matplotlib(self, babies_file, tmp_path, capsys, monkeypatch):
        monkeypatch.setitem(sys.modules, "matplotlib", None)
        code = main(["--data", str(babies_file), "--figures", str(tmp_path / "figs")])
        assert code == 1
        assert "matplotlib" in capsys.readouterr().err
        assert not (tmp_path / "figs").exists()

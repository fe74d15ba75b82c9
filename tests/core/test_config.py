"""
Tests for SimulationDefaults and logging setup.
"""

import logging
from dataclasses import FrozenInstanceError

import pytest

from pysimstats.core import DEFAULTS, SimulationDefaults, configure_logging
from pysimstats.core.exceptions import ValidationError


class TestDefaults:

    def test_classroom_values(self):
        assert DEFAULTS.replicates == 1000
        assert DEFAULTS.sample_size == 10
        assert DEFAULTS.small_sample_size == 3
        assert DEFAULTS.permutation_sample_size == 50
        assert DEFAULTS.smoothing is True
        assert DEFAULTS.data_path == "babies.txt"

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            DEFAULTS.seed = 2

    @pytest.mark.parametrize("field_name", ["replicates", "permutation_sample_size"])
    def test_rejects_zero(self, field_name):
        with pytest.raises(ValidationError, match=field_name):
            SimulationDefaults(**{field_name: 0})

    def test_rejects_single_unit_groups(self):
        with pytest.raises(ValidationError, match="at least 2"):
            SimulationDefaults(small_sample_size=1)

    def test_rejects_nonpositive_sd(self):
        with pytest.raises(ValidationError, match="parametric_sd"):
            SimulationDefaults(parametric_sd=0.0)


class TestOverrides:

    def test_replaces_fields(self):
        cfg = DEFAULTS.with_overrides(seed=7, replicates=50)
        assert cfg.seed == 7
        assert cfg.replicates == 50
        assert DEFAULTS.seed == 1

    def test_none_ignored(self):
        cfg = DEFAULTS.with_overrides(seed=None, data_path=None)
        assert cfg == DEFAULTS

    def test_unknown_key(self):
        with pytest.raises(ValidationError, match="Unknown settings"):
            DEFAULTS.with_overrides(replications=10)

    def test_invalid_value_revalidated(self):
        with pytest.raises(ValidationError):
            DEFAULTS.with_overrides(replicates=-1)


class TestConfigureLogging:

    def test_single_handler(self):
        logger = configure_logging(logging.DEBUG)
        configure_logging(logging.INFO)
        streams = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
        assert len(streams) == 1
        assert logger.level == logging.INFO
        assert logger.name == "pysimstats"

"""
Tests for the birth-weight dataset loader.
"""

import numpy as np
import pytest

from pysimstats.core.datasource import DataSource
from pysimstats.core.exceptions import DataFormatError, ValidationError
from pysimstats.datasets import (
    BABIES_COLUMNS,
    load_babies,
    smoking_groups,
    split_groups,
)

N_NONSMOKERS, N_SMOKERS, N_UNKNOWN = 120, 80, 5


class TestLoadBabies:

    def test_reads_all_rows(self, babies_file):
        ds = load_babies(babies_file)
        assert ds.n_observations == N_NONSMOKERS + N_SMOKERS + N_UNKNOWN
        assert set(ds.keys()) == set(BABIES_COLUMNS)

    def test_missing_required_column(self, tmp_path):
        path = tmp_path / "babies.txt"
        path.write_text("bwt gestation\n120 280\n")
        with pytest.raises(DataFormatError) as exc_info:
            load_babies(path)
        assert exc_info.value.missing_columns == ("smoke",)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_babies(tmp_path / "nope.txt")


class TestSmokingGroups:

    def test_group_sizes_exclude_unknown(self, babies_file):
        nonsmokers, smokers = smoking_groups(load_babies(babies_file))
        assert len(nonsmokers) == N_NONSMOKERS
        assert len(smokers) == N_SMOKERS

    def test_other_outcome(self, babies_file):
        nonsmokers, smokers = smoking_groups(load_babies(babies_file), value="gestation")
        assert len(nonsmokers) == N_NONSMOKERS
        assert np.all(nonsmokers > 100)

    def test_groups_are_copies(self, babies_file):
        ds = load_babies(babies_file)
        nonsmokers, _ = smoking_groups(ds)
        nonsmokers[:] = 0.0
        assert not np.all(ds["bwt"][ds["smoke"] == 0] == 0.0)


class TestSplitGroups:

    def test_order_follows_levels(self):
        ds = DataSource.from_arrays(v=[1.0, 2.0, 3.0, 4.0], g=[1, 0, 1, 0])
        ones, zeros = split_groups(ds, "v", "g", (1, 0))
        np.testing.assert_array_equal(ones, [1.0, 3.0])
        np.testing.assert_array_equal(zeros, [2.0, 4.0])

    def test_drops_missing_values(self):
        ds = DataSource.from_arrays(v=[1.0, np.nan, 3.0], g=[0, 0, 1])
        zeros, ones = split_groups(ds, "v", "g", (0, 1))
        np.testing.assert_array_equal(zeros, [1.0])

    def test_empty_level(self):
        ds = DataSource.from_arrays(v=[1.0, 2.0], g=[0, 0])
        with pytest.raises(ValidationError, match="g == 1"):
            split_groups(ds, "v", "g", (0, 1))

    def test_unknown_column(self):
        ds = DataSource.from_arrays(v=[1.0], g=[0])
        with pytest.raises(KeyError):
            split_groups(ds, "bwt", "g", (0,))

"""
Tests for DataSource construction, access and file loading.
"""

import numpy as np
import pandas as pd
import pytest
from numpy.testing import assert_allclose

from pysimstats.core.datasource import DataSource
from pysimstats.core.exceptions import (
    DataFormatError,
    DimensionError,
    ValidationError,
)


class TestFromArrays:

    def test_columns_and_rows(self):
        ds = DataSource.from_arrays(bwt=[120, 113, 128], smoke=[0, 1, 0])
        assert ds.keys() == frozenset({"bwt", "smoke"})
        assert ds.n_observations == 3
        assert ds["bwt"].dtype == np.float64

    def test_inconsistent_lengths(self):
        with pytest.raises(DimensionError, match="Inconsistent lengths"):
            DataSource.from_arrays(a=[1, 2, 3], b=[1, 2])

    def test_2d_rejected(self):
        with pytest.raises(DimensionError):
            DataSource.from_arrays(a=np.zeros((2, 2)))

    def test_requires_an_array(self):
        with pytest.raises(ValidationError):
            DataSource.from_arrays()

    def test_missing_key_lists_available(self):
        ds = DataSource.from_arrays(bwt=[1.0], smoke=[0.0])
        with pytest.raises(KeyError, match="Available"):
            ds["weight"]

    def test_contains(self):
        ds = DataSource.from_arrays(bwt=[1.0])
        assert "bwt" in ds
        assert "smoke" not in ds


class TestWhere:

    def test_filters_every_column(self):
        ds = DataSource.from_arrays(bwt=[120, 113, 128, 108], smoke=[0, 1, 0, 1])
        smokers = ds.where(ds["smoke"] == 1)
        assert smokers.n_observations == 2
        assert_allclose(smokers["bwt"], [113, 108])
        assert smokers.metadata["parent_n_observations"] == 4

    def test_wrong_mask_length(self):
        ds = DataSource.from_arrays(bwt=[1.0, 2.0])
        with pytest.raises(DimensionError, match="mask"):
            ds.where(np.array([True]))


class TestFromFile:

    def test_whitespace_table(self, tmp_path):
        path = tmp_path / "table.txt"
        path.write_text("bwt   smoke\n120  0\n113    1\n")
        ds = DataSource.from_file(path)
        assert ds.columns == ["bwt", "smoke"]
        assert_allclose(ds["bwt"], [120, 113])
        assert ds.metadata["source_path"] == str(path)

    def test_na_becomes_nan(self, tmp_path):
        path = tmp_path / "table.txt"
        path.write_text("bwt smoke\n120 0\nNA 1\n")
        ds = DataSource.from_file(path)
        assert np.isnan(ds["bwt"][1])

    def test_csv(self, tmp_path):
        path = tmp_path / "table.csv"
        pd.DataFrame({"a": [1.0, 2.0], "b": [3.0, 4.0]}).to_csv(path, index=False)
        ds = DataSource.from_file(path, columns=["b"])
        assert ds.keys() == frozenset({"b"})

    def test_csv_missing_requested_column(self, tmp_path):
        path = tmp_path / "table.csv"
        pd.DataFrame({"a": [1.0]}).to_csv(path, index=False)
        with pytest.raises(DataFormatError) as exc_info:
            DataSource.from_file(path, columns=["a", "z"])
        assert exc_info.value.missing_columns == ("z",)

    def test_npy_with_names(self, tmp_path):
        path = tmp_path / "table.npy"
        np.save(path, np.array([[1.0, 0.0], [2.0, 1.0]]))
        ds = DataSource.from_file(path, columns=["bwt", "smoke"])
        assert_allclose(ds["smoke"], [0.0, 1.0])

    def test_npy_default_names(self, tmp_path):
        path = tmp_path / "table.npy"
        np.save(path, np.zeros((3, 2)))
        ds = DataSource.from_file(path)
        assert ds.columns == ["V1", "V2"]

    def test_non_numeric_column(self, tmp_path):
        path = tmp_path / "table.txt"
        path.write_text("bwt smoke\n120 no\n113 yes\n")
        with pytest.raises(DataFormatError, match="smoke"):
            DataSource.from_file(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "table.txt"
        path.write_text("")
        with pytest.raises(DataFormatError):
            DataSource.from_file(path)

    def test_unknown_suffix(self, tmp_path):
        path = tmp_path / "table.xyz"
        path.write_text("a\n1\n")
        with pytest.raises(ValidationError, match="Unknown file format"):
            DataSource.from_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DataSource.from_file(tmp_path / "absent.txt")


class TestBuild:

    def test_dispatches_path(self, tmp_path):
        path = tmp_path / "t.txt"
        path.write_text("x\n1\n2\n")
        assert DataSource.build(path).n_observations == 2

    def test_dispatches_arrays(self):
        assert DataSource.build(x=[1.0, 2.0, 3.0]).n_observations == 3

"""
Birth-weight dataset.

The table has one row per birth with columns

    bwt        birth weight (ounces)
    gestation  length of gestation (days)
    parity     0 = first born
    age        mother's age (years)
    height     mother's height (inches)
    weight     mother's pre-pregnancy weight (pounds)
    smoke      0 = did not smoke, 1 = smoked during pregnancy

Other smoke codes (9 marks "unknown") belong to neither group.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pysimstats.core.datasource import DataSource
from pysimstats.core.exceptions import DataFormatError, ValidationError

logger = logging.getLogger(__name__)

BABIES_COLUMNS = ("bwt", "gestation", "parity", "age", "height", "weight", "smoke")
REQUIRED_COLUMNS = ("bwt", "smoke")

SMOKE_NO = 0
SMOKE_YES = 1

DEFAULT_PATH = "babies.txt"


def load_babies(path: str | Path = DEFAULT_PATH) -> DataSource:
    """
    Read the birth-weight table (whitespace-delimited, header row).

    Raises:
        FileNotFoundError: If path does not exist
        DataFormatError: If bwt or smoke is missing from the header
    """
    ds = DataSource.from_file(path)
    missing = tuple(c for c in REQUIRED_COLUMNS if c not in ds)
    if missing:
        raise DataFormatError(
            f"{path}: birth-weight table needs columns {list(REQUIRED_COLUMNS)}, "
            f"missing {list(missing)}",
            path=str(path),
            missing_columns=missing,
        )
    logger.info("Loaded %d birth records from %s", ds.n_observations, path)
    return ds


def split_groups(
    ds: DataSource,
    value: str,
    by: str,
    levels: tuple[float, ...],
) -> tuple[NDArray[np.floating[Any]], ...]:
    """
    Split column `value` into one array per level of column `by`.

    Rows whose `by` value is not among `levels` are dropped, as are rows
    where `value` is missing.

    Returns:
        Tuple of 1D arrays, in the order of `levels`

    Raises:
        KeyError: If either column is absent
        ValidationError: If a level matches no usable rows
    """
    values = ds[value]
    labels = ds[by]
    groups = []
    for level in levels:
        mask = (labels == level) & np.isfinite(values)
        if not mask.any():
            raise ValidationError(
                f"{by}: no rows with {by} == {level} and a recorded {value}"
            )
        groups.append(values[mask].copy())
    return tuple(groups)


def smoking_groups(
    ds: DataSource,
    value: str = "bwt",
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """Return (nonsmokers, smokers) for the given outcome column."""
    nonsmokers, smokers = split_groups(ds, value, "smoke", (SMOKE_NO, SMOKE_YES))
    return nonsmokers, smokers

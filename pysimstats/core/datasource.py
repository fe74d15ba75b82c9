"""
Universal DataSource for pysimstats.

DataSource is the "I have a table" abstraction: named numeric columns of
equal length. It doesn't know what a birth weight or a smoking indicator
is; datasets/ adds that meaning on top.

Usage:
    from pysimstats.core import DataSource

    ds = DataSource.from_file("babies.txt")     # whitespace-delimited, header
    ds = DataSource.from_dataframe(df)
    ds = DataSource.from_arrays(bwt=bwt, smoke=smoke)

    ds.keys()                     # frozenset({'bwt', 'smoke', ...})
    bwt = ds['bwt']
    smokers = ds.where(ds['smoke'] == 1)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TYPE_CHECKING

import numpy as np
import pandas as pd
from numpy.typing import NDArray

from pysimstats.core.exceptions import (
    DataFormatError,
    DimensionError,
    ValidationError,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

# Suffixes read as whitespace-delimited tables with a header row
WHITESPACE_SUFFIXES = ('.txt', '.dat', '.table')


@dataclass
class DataSource:
    """
    Column store of equal-length numeric arrays. Domain-agnostic.

    Construct via factory classmethods, not directly.
    """
    _data: dict[str, NDArray[np.floating[Any]]]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Column Access ===

    def keys(self) -> frozenset[str]:
        """
        Return the names of all available columns.

        Example:
            >>> ds = DataSource.from_arrays(bwt=bwt, smoke=smoke)
            >>> ds.keys()
            frozenset({'bwt', 'smoke'})
        """
        return frozenset(self._data.keys())

    def __getitem__(self, key: str) -> NDArray[np.floating[Any]]:
        """
        Access a named column.

        Raises:
            KeyError: If key not found, with a message listing available columns
        """
        if key not in self._data:
            available = sorted(self.keys())
            raise KeyError(
                f"DataSource has no column '{key}'. Available: {available}"
            )
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    # === Properties ===

    @property
    def n_observations(self) -> int:
        """Number of rows."""
        return self._metadata.get('n_observations', 0)

    @property
    def columns(self) -> list[str]:
        """Column names in their original order."""
        return list(self._data.keys())

    @property
    def metadata(self) -> dict[str, Any]:
        """Copy of the source metadata (origin, path, row count)."""
        return self._metadata.copy()

    # === Row selection ===

    def where(self, mask: NDArray[np.bool_]) -> DataSource:
        """
        Return a new DataSource holding only the rows where mask is True.

        Raises:
            DimensionError: If mask length differs from the row count
        """
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != (self.n_observations,):
            raise DimensionError(
                f"mask: expected shape ({self.n_observations},), got {mask.shape}"
            )
        storage = {name: col[mask] for name, col in self._data.items()}
        metadata = self.metadata
        metadata['n_observations'] = int(mask.sum())
        metadata['parent_n_observations'] = self.n_observations
        return DataSource(_data=storage, _metadata=metadata)

    # === Factory Methods ===

    @classmethod
    def from_arrays(cls, **named_arrays: NDArray) -> DataSource:
        """
        Construct from named 1D arrays of equal length.

        Raises:
            ValidationError: If no arrays are given
            DimensionError: If an array is not 1D or lengths differ
        """
        if not named_arrays:
            raise ValidationError("from_arrays: at least one named array is required")

        storage: dict[str, NDArray[np.floating[Any]]] = {}
        for name, arr in named_arrays.items():
            arr = np.asarray(arr, dtype=np.float64)
            if arr.ndim != 1:
                raise DimensionError(
                    f"{name}: expected 1D array, got {arr.ndim}D with shape {arr.shape}"
                )
            storage[name] = arr

        lengths = {name: len(arr) for name, arr in storage.items()}
        if len(set(lengths.values())) > 1:
            details = ", ".join(f"{name}={n}" for name, n in lengths.items())
            raise DimensionError(f"Inconsistent lengths: {details}")

        return cls(
            _data=storage,
            _metadata={
                'n_observations': next(iter(lengths.values())),
                'source': 'arrays',
            },
        )

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        columns: Sequence[str] | None = None,
    ) -> DataSource:
        """
        Construct from a table on disk.

        Supported formats:
            .txt/.dat/.table: whitespace-delimited with a header row
            .csv / .tsv: comma / tab separated with a header row
            .npy: 2D array; `columns` names its columns

        Raises:
            FileNotFoundError: If the file does not exist
            ValidationError: If the suffix is not supported
            DataFormatError: If the file cannot be parsed, or requested
                columns are absent
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if not path.exists():
            raise FileNotFoundError(f"Data file not found: {path}")

        if suffix in WHITESPACE_SUFFIXES + ('.csv', '.tsv'):
            sep = {'.csv': ',', '.tsv': '\t'}.get(suffix, r'\s+')
            try:
                df = pd.read_csv(path, sep=sep, header=0)
            except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
                raise DataFormatError(
                    f"Cannot parse {path}: {e}", path=str(path)
                ) from e
            if columns is not None:
                missing = tuple(c for c in columns if c not in df.columns)
                if missing:
                    raise DataFormatError(
                        f"{path}: missing columns {list(missing)}; "
                        f"header has {list(df.columns)}",
                        path=str(path),
                        missing_columns=missing,
                    )
                df = df[list(columns)]
            ds = cls.from_dataframe(df, source_path=str(path))
        elif suffix == '.npy':
            data = np.load(path)
            if data.ndim != 2:
                raise DataFormatError(
                    f"{path}: expected a 2D array, got {data.ndim}D", path=str(path)
                )
            names = list(columns) if columns is not None else [
                f"V{i + 1}" for i in range(data.shape[1])
            ]
            if len(names) != data.shape[1]:
                raise DataFormatError(
                    f"{path}: {data.shape[1]} columns but {len(names)} names given",
                    path=str(path),
                )
            ds = cls.from_arrays(**{name: data[:, i] for i, name in enumerate(names)})
            ds._metadata['source_path'] = str(path)
        else:
            raise ValidationError(f"Unknown file format: {suffix}")

        logger.debug("Loaded %d rows x %d columns from %s",
                     ds.n_observations, len(ds.columns), path)
        return ds

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, *, source_path: str | None = None) -> DataSource:
        """
        Construct from a pandas DataFrame.

        Raises:
            DataFormatError: If a column is not numeric
        """
        storage: dict[str, NDArray[np.floating[Any]]] = {}

        for col in df.columns:
            try:
                storage[str(col)] = df[col].to_numpy(dtype=np.float64)
            except (TypeError, ValueError) as e:
                raise DataFormatError(
                    f"Column '{col}' is not numeric: {e}", path=source_path
                ) from e

        metadata = {
            'n_observations': len(df),
            'source': 'dataframe',
        }
        if source_path:
            metadata['source_path'] = source_path

        return cls(_data=storage, _metadata=metadata)

    @classmethod
    def build(cls, *args, **kwargs) -> DataSource:
        """
        Convenience factory that dispatches to the appropriate from_* method.

        Examples:
            DataSource.build("babies.txt")        # from_file
            DataSource.build(bwt=bwt, smoke=s)    # from_arrays
        """
        if args and isinstance(args[0], (str, Path)):
            return cls.from_file(args[0], **kwargs)
        return cls.from_arrays(**kwargs)

"""
Datasets used by the walkthrough.

Usage:
    from pysimstats.datasets import load_babies, smoking_groups

    babies = load_babies("babies.txt")
    bwt_nonsmoke, bwt_smoke = smoking_groups(babies)
"""

from pysimstats.datasets.babies import (
    BABIES_COLUMNS,
    DEFAULT_PATH,
    SMOKE_NO,
    SMOKE_YES,
    load_babies,
    smoking_groups,
    split_groups,
)

__all__ = [
    "BABIES_COLUMNS",
    "DEFAULT_PATH",
    "SMOKE_NO",
    "SMOKE_YES",
    "load_babies",
    "smoking_groups",
    "split_groups",
]

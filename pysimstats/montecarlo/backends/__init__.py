"""Computational backends for Monte Carlo methods."""

from pysimstats.montecarlo.backends.cpu import (
    CPUPermutationBackend,
    CPUSimulationBackend,
)

__all__ = [
    "CPUPermutationBackend",
    "CPUSimulationBackend",
]

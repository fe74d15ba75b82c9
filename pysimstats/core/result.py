"""
Result envelope shared by the simulation and permutation backends.

A backend returns Result[P]: its own frozen payload P plus the metadata
every run has (settings in info, phase timings, backend name, non-fatal
warnings). Solution classes wrap a Result and expose the payload.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable output of one backend run.

    Attributes:
        params: Backend payload, e.g. SimulationParams or PermutationParams
        info: Run settings worth reporting (group sizes, sim mode, population size)
        timing: Timer.result() output, or None when not measured
        backend_name: e.g. 'cpu_simulation'
        warnings: Messages for problems that did not stop the run,
            such as replicates where the t-statistic was undefined
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def total_seconds(self) -> float | None:
        if self.timing is None:
            return None
        return self.timing.get('total_seconds')

    def has_warning(self, substring: str) -> bool:
        """True if any warning message contains substring."""
        return any(substring in w for w in self.warnings)

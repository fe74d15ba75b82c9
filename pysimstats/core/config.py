"""
Default settings for the simulation walkthrough.

The constants a classroom run uses (seed, replicate count, sample sizes)
live in one frozen dataclass. Callers override individual values with
with_overrides(); nothing here is mutable at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace

from pysimstats.core.exceptions import ValidationError


@dataclass(frozen=True)
class SimulationDefaults:
    """
    Settings for one run of the walkthrough.

    Attributes:
        seed: Seed for the single Generator shared by every step
        replicates: Monte Carlo replicates / permutations per step
        sample_size: Per-group sample size for the t-statistic simulation
        small_sample_size: Per-group size for the small-sample (t, not
            normal) comparison
        permutation_sample_size: Per-group subsample size for the
            permutation test
        parametric_mean: Mean for the parametric simulation; None uses
            the nonsmoker sample mean
        parametric_sd: SD for the parametric simulation; None uses the
            nonsmoker sample SD
        smoothing: Add one to numerator and denominator of the
            permutation p-value
        data_path: Birth-weight table, relative to the working directory
    """
    seed: int = 1
    replicates: int = 1000
    sample_size: int = 10
    small_sample_size: int = 3
    permutation_sample_size: int = 50
    parametric_mean: float | None = None
    parametric_sd: float | None = None
    smoothing: bool = True
    data_path: str = "babies.txt"

    def __post_init__(self):
        for name in ('replicates', 'sample_size', 'small_sample_size',
                     'permutation_sample_size'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValidationError(f"{name}: must be an integer >= 1, got {value!r}")
        if self.sample_size < 2 or self.small_sample_size < 2:
            raise ValidationError(
                "sample sizes: need at least 2 per group to estimate a variance"
            )
        if self.parametric_sd is not None and self.parametric_sd <= 0:
            raise ValidationError(
                f"parametric_sd: must be > 0, got {self.parametric_sd}"
            )

    def with_overrides(self, **overrides) -> SimulationDefaults:
        """
        Return a copy with the given fields replaced.

        None values are ignored, so argparse namespaces can be passed
        through directly.

        Raises:
            ValidationError: For unknown field names or invalid values
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValidationError(
                f"Unknown settings {unknown}. Valid: {sorted(known)}"
            )
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


DEFAULTS = SimulationDefaults()

"""
Wall-clock timing for simulation runs.

Backends split a run into phases (observed statistic, replicate loop,
p-value) and report each one in Result.timing. The walkthrough uses
timed() to log how long every demonstration step took.
"""

import logging
import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Phase timer for one simulation run.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('replicates'):
            for b in range(R):
                ...
        timer.stop()
        timer.result()
        # {'total_seconds': 0.05, 'replicates': 0.049}

    A phase entered more than once accumulates its time.
    """

    def __init__(self):
        self._phases: dict[str, float] = {}
        self._t0: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._t0 = time.perf_counter()
        self._total = None

    def stop(self) -> None:
        if self._t0 is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._t0

    @property
    def elapsed(self) -> float:
        """Seconds since start(), or the final total once stopped."""
        if self._total is not None:
            return self._total
        if self._t0 is None:
            return 0.0
        return time.perf_counter() - self._t0

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t = time.perf_counter()
        try:
            yield
        finally:
            self._phases[name] = self._phases.get(name, 0.0) + time.perf_counter() - t

    def result(self) -> dict[str, float]:
        """
        Phase timings plus 'total_seconds'.

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._phases}


@contextmanager
def timed(
    label: str | None = None,
    log: logging.Logger | None = None,
) -> Iterator[Timer]:
    """
    Time a block, optionally logging the duration at DEBUG level.

    Usage:
        with timed("null simulation", logger) as timer:
            sim = simulate_null(nonsmokers, 10, R=1000)
        timer.elapsed
    """
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
        if log is not None:
            log.debug("%s took %.3fs", label or "block", timer.elapsed)

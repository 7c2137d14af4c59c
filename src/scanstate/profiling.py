"""scanstate ScanAccumulator: opt-in profiling for state-machine runs.

This module provides accumulated metrics across driver runs:
- Total elapsed time
- Number of runs and failed runs
- State function invocations (steps)
- Input length

Zero overhead when disabled (get_scan_accumulator() returns None).

Example:
    from scanstate import scan
    from scanstate.profiling import profiled_scan

    with profiled_scan() as metrics:
        scan(source, root, lex_document)

    print(metrics.summary())
    # {"total_ms": 0.4, "runs": 1, "steps": 12, "source_length": 40, "failures": 0}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ScanAccumulator:
    """Accumulated metrics across driver runs.

    Attributes:
        start_time: Profiling start timestamp.
        runs: Number of driver runs recorded.
        steps: Total state function invocations.
        source_length: Total input bytes scanned.
        failures: Runs that ended with a diagnostic.

    """

    start_time: float = field(default_factory=perf_counter)
    runs: int = 0
    steps: int = 0
    source_length: int = 0
    failures: int = 0

    def record_run(self, source_length: int, steps: int, failed: bool) -> None:
        """Record a finished driver run.

        Args:
            source_length: Input length in bytes.
            steps: State functions invoked during the run.
            failed: Whether the run ended with a diagnostic.

        """
        self.runs += 1
        self.steps += steps
        self.source_length += source_length
        if failed:
            self.failures += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of scan metrics."""
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "runs": self.runs,
            "steps": self.steps,
            "source_length": self.source_length,
            "failures": self.failures,
        }


_accumulator: ContextVar[ScanAccumulator | None] = ContextVar(
    "scan_accumulator",
    default=None,
)


def get_scan_accumulator() -> ScanAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_scan() -> Iterator[ScanAccumulator]:
    """Context manager for profiled scanning.

    Creates a ScanAccumulator and makes it available via
    get_scan_accumulator() for the duration of the with block.

    Yields:
        ScanAccumulator that will be populated by driver runs.

    """
    acc = ScanAccumulator()
    token: Token[ScanAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)

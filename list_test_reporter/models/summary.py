"""Run-wide result counters."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Totals reported at the end of a run.

    Unknown outcomes are counted as skipped.
    """

    passed: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        """Number of results received."""
        return self.passed + self.failed + self.skipped

    @property
    def has_failures(self) -> bool:
        """Whether any test failed."""
        return self.failed > 0

"""Aggregation of a run's results into counts, a verdict and critical failures."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from devverify.core.config import READY_WARN_THRESHOLD
from devverify.services.checkers import CheckResult, CheckStatus

__all__ = ["Summary", "Verdict", "critical_failures", "decide_verdict"]


class Verdict(Enum):
    """Overall classification of a run."""

    READY = "ready"
    USABLE = "usable"
    BLOCKED = "blocked"

    def __str__(self) -> str:
        return self.value


def decide_verdict(
    failed: int,
    warned: int,
    *,
    aborted: bool = False,
    warn_threshold: int = READY_WARN_THRESHOLD,
) -> Verdict:
    """Map counts to a verdict.

    Any failure (or an aborted run) blocks; otherwise at most
    ``warn_threshold`` warnings is ready and more is merely usable.
    """
    if failed > 0 or aborted:
        return Verdict.BLOCKED
    if warned <= warn_threshold:
        return Verdict.READY
    return Verdict.USABLE


def critical_failures(results: Iterable[CheckResult]) -> tuple[CheckResult, ...]:
    """Failures of checks marked critical, in check order."""
    return tuple(r for r in results if r.is_critical_failure)


@dataclass(frozen=True, slots=True)
class Summary:
    passed: int
    warned: int
    failed: int
    verdict: Verdict
    critical: tuple[CheckResult, ...] = ()

    @property
    def total(self) -> int:
        return self.passed + self.warned + self.failed

    @classmethod
    def from_results(
        cls,
        results: Iterable[CheckResult],
        *,
        aborted: bool = False,
        warn_threshold: int = READY_WARN_THRESHOLD,
    ) -> Summary:
        ordered = tuple(results)
        counts = {status: 0 for status in CheckStatus}
        for result in ordered:
            counts[result.status] += 1

        failed = counts[CheckStatus.FAIL]
        warned = counts[CheckStatus.WARN]
        return cls(
            passed=counts[CheckStatus.PASS],
            warned=warned,
            failed=failed,
            verdict=decide_verdict(
                failed, warned, aborted=aborted, warn_threshold=warn_threshold
            ),
            critical=critical_failures(ordered),
        )

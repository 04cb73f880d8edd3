# SPDX-License-Identifier: MIT
"""Base types for checks: status, result and the append-only result log."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Protocol

__all__ = ["CheckStatus", "CheckResult", "ResultSink", "ResultLog"]


class CheckStatus(IntEnum):
    """Status of a check result, ordered by severity."""

    PASS = 0
    """Check passed."""

    WARN = 1
    """Optional item missing or the signal was inconclusive."""

    FAIL = 2
    """Required item missing or broken."""

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of a single check.

    Attributes:
        name: Label of the fact checked (e.g. "Git Installation")
        status: Whether the check passed, warned, or failed
        message: Short human-readable summary
        details: Optional version string, remediation hint or error excerpt
        critical: True if a failure here blocks all further development
    """

    name: str
    status: CheckStatus
    message: str
    details: str | None = None
    critical: bool = False

    @property
    def is_pass(self) -> bool:
        return self.status == CheckStatus.PASS

    @property
    def is_warning(self) -> bool:
        return self.status == CheckStatus.WARN

    @property
    def is_failure(self) -> bool:
        return self.status == CheckStatus.FAIL

    @property
    def is_critical_failure(self) -> bool:
        """Return True if this is a failure of a check marked critical."""
        return self.critical and self.is_failure

    @classmethod
    def passed(
        cls, name: str, message: str, details: str | None = None, *, critical: bool = False
    ) -> CheckResult:
        """Create a passing check result."""
        return cls(name, CheckStatus.PASS, message, details, critical)

    @classmethod
    def warning(
        cls, name: str, message: str, details: str | None = None, *, critical: bool = False
    ) -> CheckResult:
        """Create a warning check result."""
        return cls(name, CheckStatus.WARN, message, details, critical)

    @classmethod
    def failure(
        cls, name: str, message: str, details: str | None = None, *, critical: bool = False
    ) -> CheckResult:
        """Create a failed check result."""
        return cls(name, CheckStatus.FAIL, message, details, critical)


class ResultSink(Protocol):
    """Write-only view of a result log handed to probes."""

    def append(self, result: CheckResult) -> None: ...


def _empty_results() -> list[CheckResult]:
    return []


@dataclass
class ResultLog:
    """Ordered, append-only collection of results for one run.

    Insertion order is check order. Probes only ever see it as a
    ``ResultSink``; reading is for the orchestrator and the reporter.
    Concurrent probes each get a child log that is merged back with
    ``extend_from`` once the group has joined.
    """

    _results: list[CheckResult] = field(default_factory=_empty_results)

    def append(self, result: CheckResult) -> None:
        self._results.append(result)

    def extend_from(self, other: ResultLog) -> None:
        self._results.extend(other._results)

    @property
    def results(self) -> tuple[CheckResult, ...]:
        return tuple(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[CheckResult]:
        return iter(tuple(self._results))

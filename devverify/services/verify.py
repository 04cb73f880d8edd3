from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from devverify.core.config import Layout
from devverify.services.checkers import (
    CheckGroup,
    CheckResult,
    CommandRunner,
    DefaultCommandRunner,
    GroupOutcome,
    ProbeContext,
    ResultLog,
    build_groups,
    run_group,
)

type GroupCallback = Callable[[GroupOutcome], None]


@dataclass(frozen=True, slots=True)
class VerifyReport:
    """Everything one run observed.

    Attributes:
        results: Results in check order
        groups: Outcomes of the groups that ran, in run order
        aborted: True if a foundational group failed and the run stopped
    """

    results: tuple[CheckResult, ...]
    groups: tuple[GroupOutcome, ...]
    aborted: bool = False


class VerifyService:
    """Run the check groups in order against one workspace.

    Each group is a join point: the next group starts only after every probe
    of the current one has reported. A failure in a foundational group stops
    the run there.
    """

    def __init__(
        self,
        *,
        root: Path,
        layout: Layout | None = None,
        timeout: float | None = None,
        runner: CommandRunner | None = None,
        groups: tuple[CheckGroup, ...] | None = None,
    ) -> None:
        self._layout = layout or Layout()
        self._ctx = ProbeContext(
            root=root,
            timeout=timeout if timeout is not None else self._layout.command_timeout,
            runner=runner or DefaultCommandRunner(),
        )
        self._groups = groups if groups is not None else build_groups(self._layout)

    @property
    def groups(self) -> tuple[CheckGroup, ...]:
        return self._groups

    def run(self, on_group: GroupCallback | None = None) -> VerifyReport:
        return asyncio.run(self.run_async(on_group))

    async def run_async(self, on_group: GroupCallback | None = None) -> VerifyReport:
        log = ResultLog()
        outcomes: list[GroupOutcome] = []

        for group in self._groups:
            outcome = await run_group(group, self._ctx, log)
            outcomes.append(outcome)
            if on_group is not None:
                on_group(outcome)
            if group.foundational and outcome.has_failures:
                return VerifyReport(results=log.results, groups=tuple(outcomes), aborted=True)

        return VerifyReport(results=log.results, groups=tuple(outcomes))

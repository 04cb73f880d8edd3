# SPDX-License-Identifier: MIT
"""Check groups and the fixed group list for a workspace layout.

A group is a named bundle of probes run together. Optionally a gate probe
runs first and the members are skipped when it does not pass (no dependency
count without ``node_modules``, no hook check outside a git repository).
Concurrent members each write to their own child log; the children are merged
into the run's log in declaration order once every member has finished, so
the order of results never depends on scheduling.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum, auto

from devverify.core.config import Layout
from devverify.services.checkers.base import CheckResult, ResultLog
from devverify.services.checkers.common import ProbeContext
from devverify.services.checkers.probes import (
    BuildArtifactProbe,
    CommandProbe,
    FileProbe,
    Probe,
    ShellQueryProbe,
    run_probe,
)

__all__ = ["CheckGroup", "GroupMode", "GroupOutcome", "build_groups", "run_group"]


class GroupMode(Enum):
    """How member results decide whether the group as a whole is satisfied."""

    ALL = auto()
    """No member failed."""

    ANY = auto()
    """At least one member passed."""


@dataclass(frozen=True, slots=True)
class CheckGroup:
    """A named, ordered bundle of probes.

    Attributes:
        key: Stable identifier (e.g. "tools")
        title: Heading printed above the group's results
        probes: Member probes, in declaration order
        gate: Probe that must pass before the members run
        concurrent: Run members concurrently instead of one after another
        foundational: A failure here aborts the rest of the run
        mode: Group-level success rule
        unmet_message: Line shown under the group when the rule is not met
    """

    key: str
    title: str
    probes: tuple[Probe, ...]
    gate: FileProbe | None = None
    concurrent: bool = False
    foundational: bool = False
    mode: GroupMode = GroupMode.ALL
    unmet_message: str | None = None


@dataclass(frozen=True, slots=True)
class GroupOutcome:
    group: CheckGroup
    results: tuple[CheckResult, ...]

    @property
    def ok(self) -> bool:
        if self.group.mode is GroupMode.ANY:
            return any(r.is_pass for r in self.results)
        return not any(r.is_failure for r in self.results)

    @property
    def has_failures(self) -> bool:
        return any(r.is_failure for r in self.results)


async def run_group(group: CheckGroup, ctx: ProbeContext, log: ResultLog) -> GroupOutcome:
    """Run every probe of ``group`` and append their results to ``log``.

    Returns only after all members have appended their results.
    """
    local = ResultLog()

    gated_out = group.gate is not None and not await run_probe(group.gate, ctx, local)
    if not gated_out:
        if group.concurrent:
            children = [ResultLog() for _ in group.probes]
            await asyncio.gather(
                *(run_probe(probe, ctx, child) for probe, child in zip(group.probes, children))
            )
            for child in children:
                local.extend_from(child)
        else:
            for probe in group.probes:
                await run_probe(probe, ctx, local)

    log.extend_from(local)
    return GroupOutcome(group=group, results=local.results)


def build_groups(layout: Layout) -> tuple[CheckGroup, ...]:
    """Build the ordered group list for ``layout``."""
    return (
        CheckGroup(
            key="tools",
            title="Checking system tools...",
            probes=tuple(
                CommandProbe(
                    f"{tool.label} Installation",
                    tool.command,
                    required=True,
                    critical=True,
                    hint=tool.hint,
                )
                for tool in layout.foundation
            ),
            foundational=True,
        ),
        CheckGroup(
            key="structure",
            title="Checking project structure...",
            probes=(
                FileProbe("Package JSON", layout.manifest, critical=True),
                FileProbe("TypeScript Config", layout.type_config),
                FileProbe("ESLint Config", layout.lint_config, required=False),
                FileProbe("Prettier Config", layout.format_config, required=False),
            ),
        ),
        CheckGroup(
            key="dependencies",
            title="Checking dependencies...",
            gate=FileProbe("Node Modules", layout.dependency_root),
            probes=(
                ShellQueryProbe(
                    "Dependencies",
                    layout.dependency_query,
                    predicate=lambda count: count > 0,
                    success_message="{value} packages installed",
                    failure_message="No packages found",
                    failure_hint="Run: bun install",
                    error_message="Could not check package count",
                    error_hint="Dependencies may still be properly installed",
                ),
            ),
        ),
        CheckGroup(
            key="packages",
            title="Checking workspace packages...",
            probes=tuple(
                BuildArtifactProbe(package, layout.build_dirs, manifest=layout.manifest)
                for package in layout.packages
            ),
            concurrent=True,
        ),
        CheckGroup(
            key="build",
            title="Checking build system...",
            probes=(
                CommandProbe(
                    "TypeScript",
                    layout.type_checker.command,
                    required=False,
                    hint=layout.type_checker.hint,
                ),
                CommandProbe(
                    "ESLint",
                    layout.linter.command,
                    required=False,
                    hint=layout.linter.hint,
                ),
                BuildArtifactProbe(
                    layout.core_package,
                    layout.core_build_dirs,
                    manifest=layout.manifest,
                    required=True,
                    critical=True,
                    require_all=True,
                    report_structure=False,
                    name="Core Package Build",
                ),
            ),
            concurrent=True,
        ),
        CheckGroup(
            key="environment",
            title="Checking environment setup...",
            probes=(
                FileProbe("Environment File", layout.env_file, required=False),
                FileProbe("Environment Template", layout.env_template, required=False),
            ),
        ),
        CheckGroup(
            key="ide",
            title="Checking IDE setup...",
            probes=tuple(FileProbe(f.label, f.path, required=False) for f in layout.ide_files),
            mode=GroupMode.ANY,
            unmet_message="No IDE configuration found",
        ),
        CheckGroup(
            key="git",
            title="Checking Git setup...",
            gate=FileProbe("Git Repository", layout.vcs_dir),
            probes=(FileProbe("Husky Git Hooks", layout.hook_dir, required=False),),
        ),
    )

# SPDX-License-Identifier: MIT
"""Probe definitions and the per-kind verification logic.

A probe is a frozen description of one fact to verify. There are exactly
four kinds:
- CommandProbe: an executable on PATH that answers a version query
- FileProbe: a file or directory relative to the workspace root
- BuildArtifactProbe: a workspace package with its manifest and build output
- ShellQueryProbe: a shell pipeline whose parsed output is classified

``run_probe`` dispatches over the closed ``Probe`` union. Each kind maps
every error path to a status; nothing expected escapes as an exception.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import assert_never

from devverify.core.result import Err, Ok
from devverify.services.checkers.base import CheckResult, CheckStatus, ResultSink
from devverify.services.checkers.common import ProbeContext, first_line, parse_count, truncate

__all__ = [
    "BuildArtifactProbe",
    "CommandProbe",
    "FileProbe",
    "Probe",
    "ShellQueryProbe",
    "run_probe",
]


@dataclass(frozen=True, slots=True)
class CommandProbe:
    """An executable that must resolve on PATH and report a version.

    Attributes:
        name: Result label
        command: Program and leading arguments (e.g. ("bunx", "tsc"))
        version_args: Arguments appended to ask for the version
        required: Missing means FAIL if True, WARN otherwise
        critical: A failure blocks all further development
        hint: Remediation shown when the command is unusable
    """

    name: str
    command: tuple[str, ...]
    version_args: tuple[str, ...] = ("--version",)
    required: bool = True
    critical: bool = False
    hint: str | None = None

    @property
    def display(self) -> str:
        return " ".join(self.command)


@dataclass(frozen=True, slots=True)
class FileProbe:
    """A filesystem entry relative to the workspace root."""

    name: str
    path: str
    required: bool = True
    critical: bool = False

    def check(self, ctx: ProbeContext) -> CheckResult:
        target = ctx.root / self.path
        try:
            if target.is_dir():
                return CheckResult.passed(
                    self.name, f"Found {self.path}", "Directory", critical=self.critical
                )
            if target.exists():
                size = target.stat().st_size
                return CheckResult.passed(
                    self.name, f"Found {self.path}", f"File ({size} bytes)", critical=self.critical
                )
        except OSError:
            # Unreadable entries count as missing.
            pass

        if self.required:
            return CheckResult.failure(
                self.name, f"Missing {self.path}", "Required for development", critical=self.critical
            )
        return CheckResult.warning(
            self.name, f"Missing {self.path}", "Optional but recommended", critical=self.critical
        )


@dataclass(frozen=True, slots=True)
class BuildArtifactProbe:
    """A workspace package and its build output directories.

    Attributes:
        package: Package directory name under the workspace root
        output_dirs: Recognized build output directory names
        manifest: Manifest file expected inside the package
        required: Missing build output is FAIL if True, WARN otherwise
        critical: A failure blocks all further development
        require_all: Every output dir must exist, not just one
        report_structure: Emit separate results for the package directory and
            manifest (and stop early when either is absent)
        name: Result label, defaults to "<package> Build"
    """

    package: str
    output_dirs: tuple[str, ...]
    manifest: str = "package.json"
    required: bool = False
    critical: bool = False
    require_all: bool = False
    report_structure: bool = True
    name: str | None = None

    @property
    def label(self) -> str:
        return self.name or f"{self.package} Build"

    @property
    def build_hint(self) -> str:
        return f"Run: bun run workspace {self.package} build"


def _always_true(_: int) -> bool:
    return True


@dataclass(frozen=True, slots=True)
class ShellQueryProbe:
    """A shell query whose parsed output decides the status.

    ``success_message`` and ``failure_message`` may reference ``{value}``.
    Errors never produce FAIL: an unclear signal is only a warning.
    """

    name: str
    expression: str
    predicate: Callable[[int], bool] = _always_true
    parse: Callable[[str], int] = parse_count
    success_message: str = "{value}"
    failure_message: str = "Unexpected result ({value})"
    failure_hint: str | None = None
    error_message: str = "Could not run query"
    error_hint: str | None = None


type Probe = CommandProbe | FileProbe | BuildArtifactProbe | ShellQueryProbe


async def run_probe(probe: Probe, ctx: ProbeContext, sink: ResultSink) -> bool:
    """Run ``probe`` and append its results to ``sink``.

    Returns:
        True if the probe's own outcome passed.
    """
    match probe:
        case CommandProbe():
            return await _run_command(probe, ctx, sink)
        case FileProbe():
            return _run_file(probe, ctx, sink)
        case BuildArtifactProbe():
            return _run_build_artifact(probe, ctx, sink)
        case ShellQueryProbe():
            return await _run_shell_query(probe, ctx, sink)
        case _:
            assert_never(probe)


def _run_file(probe: FileProbe, ctx: ProbeContext, sink: ResultSink) -> bool:
    result = probe.check(ctx)
    sink.append(result)
    return result.is_pass


async def _run_command(probe: CommandProbe, ctx: ProbeContext, sink: ResultSink) -> bool:
    status = CheckStatus.FAIL if probe.required else CheckStatus.WARN

    if shutil.which(probe.command[0]) is None:
        details = probe.hint or "Please install and ensure it's in your PATH"
        sink.append(
            CheckResult(probe.name, status, f"{probe.display} not found", details, probe.critical)
        )
        return False

    result = await ctx.runner.run(
        [*probe.command, *probe.version_args], cwd=ctx.root, timeout=ctx.timeout
    )
    match result:
        case Ok(value=stdout):
            sink.append(
                CheckResult.passed(
                    probe.name,
                    f"Found {probe.display}",
                    first_line(stdout) or None,
                    critical=probe.critical,
                )
            )
            return True
        case Err(error=error):
            if error.timed_out:
                message = f"{probe.display} timed out"
                details = error.stderr
            else:
                message = f"{probe.display} not working"
                details = truncate(error.stderr) or probe.hint or str(error)
            sink.append(CheckResult(probe.name, status, message, details, probe.critical))
            return False


def _is_dir(path: Path) -> bool:
    # Unreadable or unnameable entries count as missing.
    try:
        return path.is_dir()
    except OSError:
        return False


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def _run_build_artifact(probe: BuildArtifactProbe, ctx: ProbeContext, sink: ResultSink) -> bool:
    package_dir = ctx.root / probe.package
    unbuilt = CheckStatus.FAIL if probe.required else CheckStatus.WARN

    if probe.report_structure:
        package = FileProbe(f"{probe.package} Package", probe.package, critical=probe.critical)
        if not _run_file(package, ctx, sink):
            return False
        manifest = FileProbe(
            f"{probe.package} {probe.manifest}",
            f"{probe.package}/{probe.manifest}",
            critical=probe.critical,
        )
        if not _run_file(manifest, ctx, sink):
            return False
    else:
        if not _is_dir(package_dir):
            sink.append(
                CheckResult(
                    probe.label,
                    unbuilt,
                    f"{probe.package} package directory missing",
                    "Run: bun install",
                    probe.critical,
                )
            )
            return False
        if not _is_file(package_dir / probe.manifest):
            sink.append(
                CheckResult(
                    probe.label,
                    unbuilt,
                    f"{probe.package} {probe.manifest} missing",
                    "Required for development",
                    probe.critical,
                )
            )
            return False

    present = [d for d in probe.output_dirs if _is_dir(package_dir / d)]
    missing = [d for d in probe.output_dirs if d not in present]
    built = not missing if probe.require_all else bool(present)

    if built:
        sink.append(
            CheckResult.passed(
                probe.label,
                f"{probe.package} package is built",
                ", ".join(present),
                critical=probe.critical,
            )
        )
        return True

    message = f"{probe.package} package not built"
    if present:
        message = f"{probe.package} package partially built (missing {', '.join(missing)})"
    sink.append(CheckResult(probe.label, unbuilt, message, probe.build_hint, probe.critical))
    return False


async def _run_shell_query(probe: ShellQueryProbe, ctx: ProbeContext, sink: ResultSink) -> bool:
    result = await ctx.runner.run_shell(probe.expression, cwd=ctx.root, timeout=ctx.timeout)

    if isinstance(result, Err):
        details = probe.error_hint or truncate(str(result.error))
        sink.append(CheckResult.warning(probe.name, probe.error_message, details))
        return False

    try:
        value = probe.parse(result.value)
    except ValueError:
        details = probe.error_hint or truncate(result.value) or None
        sink.append(CheckResult.warning(probe.name, probe.error_message, details))
        return False

    if probe.predicate(value):
        sink.append(CheckResult.passed(probe.name, probe.success_message.format(value=value)))
        return True

    sink.append(
        CheckResult.warning(
            probe.name, probe.failure_message.format(value=value), probe.failure_hint
        )
    )
    return False

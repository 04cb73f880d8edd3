# SPDX-License-Identifier: MIT
"""Common utilities for probes.

This module provides shared functionality used by all probes:
- CommandRunner protocol for subprocess abstraction
- ProbeContext carrying the workspace root and command deadline
- Output parsing helpers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from devverify.core.config import DEFAULT_COMMAND_TIMEOUT
from devverify.core.result import Result
from devverify.platform.process import ProcessError, run_async, run_shell_async

__all__ = [
    "CommandRunner",
    "DefaultCommandRunner",
    "ProbeContext",
    "first_line",
    "parse_count",
    "truncate",
]


class CommandRunner(Protocol):
    """Protocol for running external commands.

    This abstraction allows faking subprocess calls in tests.
    """

    async def run(
        self, args: list[str], *, cwd: Path | None = None, timeout: float
    ) -> Result[str, ProcessError]:
        """Run a command, returning Ok(stdout) or Err(ProcessError)."""
        ...

    async def run_shell(
        self, expression: str, *, cwd: Path | None = None, timeout: float
    ) -> Result[str, ProcessError]:
        """Evaluate a shell expression, returning Ok(stdout) or Err(ProcessError)."""
        ...


class DefaultCommandRunner:
    """Default command runner backed by asyncio subprocesses."""

    async def run(
        self, args: list[str], *, cwd: Path | None = None, timeout: float
    ) -> Result[str, ProcessError]:
        return await run_async(args, cwd=cwd, timeout=timeout)

    async def run_shell(
        self, expression: str, *, cwd: Path | None = None, timeout: float
    ) -> Result[str, ProcessError]:
        return await run_shell_async(expression, cwd=cwd, timeout=timeout)


@dataclass(frozen=True, slots=True)
class ProbeContext:
    """What every probe needs to know about the run it belongs to.

    Attributes:
        root: Workspace root; probe paths are relative to it
        timeout: Deadline in seconds for each external command
        runner: Command runner for subprocess probes
    """

    root: Path
    timeout: float = DEFAULT_COMMAND_TIMEOUT
    runner: CommandRunner = field(default_factory=DefaultCommandRunner)


def first_line(text: str) -> str:
    """Extract first non-empty line from text.

    Useful for parsing version output from commands.
    """
    for line in text.strip().splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return ""


def parse_count(text: str) -> int:
    """Parse the integer printed by a counting query such as ``wc -l``.

    Raises:
        ValueError: If the output holds no integer.
    """
    return int(first_line(text))


def truncate(text: str, limit: int = 200) -> str:
    """Shorten error output for the details line."""
    text = text.strip()
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."

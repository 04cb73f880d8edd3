"""Bounded asynchronous subprocess execution.

Every external command the checks spawn goes through here. Each call is an
awaitable with an explicit deadline: when the deadline passes the child is
killed and an ``Err`` comes back instead of the run hanging.

Usage:
    result = await run_async(["git", "--version"], timeout=10.0)
    match result:
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import asyncio
import os
import signal
from dataclasses import dataclass
from pathlib import Path

from devverify.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run_async", "run_shell_async"]

# Children get their own process group so a timeout can kill whole pipelines.
_NEW_SESSION = os.name == "posix"

# Seconds to wait for killed processes to release their pipes.
_KILL_GRACE = 2.0


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed, unlaunchable or timed-out subprocess.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or -1 if the process never ran or was killed.
        stdout: Standard output (may be empty).
        stderr: Standard error, or the launch/timeout reason.
        timed_out: True if the deadline expired.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if self.timed_out:
            return f"{cmd_str} timed out"
        if self.returncode == -1:
            return f"{cmd_str} could not be started"
        return f"{cmd_str} failed (exit {self.returncode})"


async def run_async(
    cmd: list[str],
    *,
    cwd: Path | None = None,
    timeout: float,
) -> Result[str, ProcessError]:
    """Execute a command and return its stdout or an error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        timeout: Maximum seconds to wait before killing the process.

    Returns:
        Ok(stdout) on exit status 0, Err(ProcessError) otherwise.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=str(cwd) if cwd else None,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=_NEW_SESSION,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    return await _collect(proc, tuple(cmd), timeout)


async def run_shell_async(
    expression: str,
    *,
    cwd: Path | None = None,
    timeout: float,
) -> Result[str, ProcessError]:
    """Evaluate ``expression`` with the system shell.

    Same contract as ``run_async``; used for pipelines such as
    ``bun pm ls | wc -l`` that need shell redirection.
    """
    try:
        proc = await asyncio.create_subprocess_shell(
            expression,
            cwd=str(cwd) if cwd else None,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=_NEW_SESSION,
        )
    except OSError as e:
        return Err(ProcessError(command=(expression,), returncode=-1, stdout="", stderr=str(e)))

    return await _collect(proc, (expression,), timeout)


async def _collect(
    proc: asyncio.subprocess.Process,
    command: tuple[str, ...],
    timeout: float,
) -> Result[str, ProcessError]:
    try:
        raw_out, raw_err = await asyncio.wait_for(proc.communicate(), timeout)
    except TimeoutError:
        await _kill(proc)
        return Err(
            ProcessError(
                command=command,
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
                timed_out=True,
            )
        )

    stdout = raw_out.decode("utf-8", errors="replace")
    stderr = raw_err.decode("utf-8", errors="replace")
    returncode = proc.returncode if proc.returncode is not None else -1
    if returncode != 0:
        return Err(
            ProcessError(command=command, returncode=returncode, stdout=stdout, stderr=stderr)
        )
    return Ok(stdout)


async def _kill(proc: asyncio.subprocess.Process) -> None:
    """Kill ``proc`` and everything it spawned, waiting at most ``_KILL_GRACE``."""
    try:
        if _NEW_SESSION:
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except ProcessLookupError:
        return

    try:
        await asyncio.wait_for(proc.wait(), _KILL_GRACE)
    except TimeoutError:
        # A descendant left the group and still holds a pipe; stop waiting for it.
        pass

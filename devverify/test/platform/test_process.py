"""Tests for bounded async subprocess execution."""

import asyncio
import sys
import time

from devverify.core.result import Err, Ok
from devverify.platform.process import ProcessError, run_async, run_shell_async


class TestRunAsync:
    def test_success_returns_stdout(self) -> None:
        result = asyncio.run(run_async([sys.executable, "-c", "print('hello')"], timeout=10))
        assert isinstance(result, Ok)
        assert result.value.strip() == "hello"

    def test_nonzero_exit(self) -> None:
        result = asyncio.run(
            run_async(
                [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"],
                timeout=10,
            )
        )
        assert isinstance(result, Err)
        assert result.error.returncode == 3
        assert "boom" in result.error.stderr
        assert result.error.timed_out is False

    def test_missing_command(self) -> None:
        result = asyncio.run(run_async(["dev-verify-no-such-command-xyz"], timeout=10))
        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert "could not be started" in str(result.error)

    def test_timeout_kills_process(self) -> None:
        result = asyncio.run(
            run_async([sys.executable, "-c", "import time; time.sleep(30)"], timeout=0.3)
        )
        assert isinstance(result, Err)
        assert result.error.timed_out is True
        assert "timed out" in result.error.stderr
        assert "timed out" in str(result.error)


class TestRunShellAsync:
    def test_pipeline(self) -> None:
        result = asyncio.run(run_shell_async("printf 'a\\nb\\nc\\n' | wc -l", timeout=10))
        assert isinstance(result, Ok)
        assert result.value.strip() == "3"

    def test_failure(self) -> None:
        result = asyncio.run(run_shell_async("exit 4", timeout=10))
        assert isinstance(result, Err)
        assert result.error.returncode == 4

    def test_timeout_kills_whole_pipeline(self) -> None:
        started = time.monotonic()
        result = asyncio.run(run_shell_async("sleep 30 | cat", timeout=0.3))
        elapsed = time.monotonic() - started

        assert isinstance(result, Err)
        assert result.error.timed_out is True
        assert elapsed < 5


class TestProcessError:
    def test_str_truncates_long_commands(self) -> None:
        error = ProcessError(
            command=("a", "b", "c", "d"), returncode=1, stdout="", stderr=""
        )
        assert str(error) == "a b c ... failed (exit 1)"

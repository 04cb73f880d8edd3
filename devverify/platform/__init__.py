"""Platform abstraction layer."""

from .process import (
    ProcessError,
    run_async,
    run_shell_async,
)

__all__ = [
    "ProcessError",
    "run_async",
    "run_shell_async",
]

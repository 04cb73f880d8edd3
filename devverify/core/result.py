"""Result type for expected failures.

Probes never raise for an environment problem; the layers below them hand back
an ``Ok`` or an ``Err`` and the probe decides which status the error maps to.

Usage:
    match await run_async(["bun", "--version"], timeout=5.0):
        case Ok(stdout):
            print(first_line(stdout))
        case Err(error):
            print(f"bun failed: {error}")
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Ok", "Err", "Result"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]

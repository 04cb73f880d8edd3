"""Exit codes for the verification CLI.

A completed report always exits with OK, whatever its verdict. The other
codes are reserved for invocation problems and for the single fatal path.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    These values are used as shell exit codes and should remain stable:
    - 0: Report produced
    - 1: User error (bad --workspace, unreadable arguments)
    - 2: Environment error (blocked verdict under --strict)
    - 10: Internal error (unexpected fault inside the tool itself)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    INTERNAL_ERROR = 10

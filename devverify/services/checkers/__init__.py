# SPDX-License-Identifier: MIT
"""Probes, result log and check groups for environment verification.

- base: CheckStatus, CheckResult and the append-only ResultLog
- probes: the four probe kinds and their dispatch
- groups: CheckGroup, the group runner and the fixed group list
"""

from devverify.services.checkers.base import CheckResult, CheckStatus, ResultLog, ResultSink
from devverify.services.checkers.common import CommandRunner, DefaultCommandRunner, ProbeContext
from devverify.services.checkers.groups import (
    CheckGroup,
    GroupMode,
    GroupOutcome,
    build_groups,
    run_group,
)
from devverify.services.checkers.probes import (
    BuildArtifactProbe,
    CommandProbe,
    FileProbe,
    Probe,
    ShellQueryProbe,
    run_probe,
)

__all__ = [
    # Result types
    "CheckResult",
    "CheckStatus",
    "ResultLog",
    "ResultSink",
    # Context
    "CommandRunner",
    "DefaultCommandRunner",
    "ProbeContext",
    # Probes
    "BuildArtifactProbe",
    "CommandProbe",
    "FileProbe",
    "Probe",
    "ShellQueryProbe",
    "run_probe",
    # Groups
    "CheckGroup",
    "GroupMode",
    "GroupOutcome",
    "build_groups",
    "run_group",
]

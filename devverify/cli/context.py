from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from devverify.core.config import Layout, load_layout_or_default
from devverify.core.errors import ErrorCode
from devverify.core.result import Err
from devverify.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    layout: Layout
    console: ConsoleProtocol


def resolve_root(workspace: Path | None) -> Path:
    """Resolve the workspace to inspect: ``--workspace`` or the current directory."""
    if workspace is None:
        return Path.cwd().resolve()

    try:
        root = workspace.expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --workspace: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not root.is_dir():
        typer.echo(f"error: --workspace '{root}' is not a directory", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return root


def build_context(root: Path, console: ConsoleProtocol | None = None) -> CLIContext:
    """Load the layout for ``root``; an unusable config file falls back to defaults."""
    console = console or RichConsole()

    layout_result = load_layout_or_default(root)
    if isinstance(layout_result, Err):
        console.warning(f"{layout_result.error.message} (using defaults)")
        layout = Layout()
    else:
        layout = layout_result.value

    return CLIContext(root=root, layout=layout, console=console)

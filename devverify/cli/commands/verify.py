from __future__ import annotations

import time
from pathlib import Path

import typer

from devverify import __version__
from devverify.cli.context import CLIContext, build_context, resolve_root
from devverify.core.errors import ErrorCode
from devverify.output.console import RichConsole, Style
from devverify.output.report import print_aborted, print_group, print_summary
from devverify.services.checkers import GroupOutcome
from devverify.services.report import Summary, Verdict
from devverify.services.verify import VerifyService


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def verify(
    workspace: Path | None = typer.Option(
        None,
        "--workspace",
        help="Workspace root to inspect (defaults to the current directory)",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        min=0.1,
        help="Seconds each external command may take (default from dev-verify.toml or 10)",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit non-zero when the environment is blocked",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show layout and timings"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Verify the development environment and report what needs attention."""
    root = resolve_root(workspace)
    console = RichConsole()

    try:
        ctx = build_context(root, console)
        summary = run_verification(ctx, timeout=timeout, verbose=verbose)
    except Exception as e:
        console.error(f"Verification failed: {e}")
        raise typer.Exit(code=int(ErrorCode.INTERNAL_ERROR))

    if strict and summary.verdict is Verdict.BLOCKED:
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))


def run_verification(ctx: CLIContext, *, timeout: float | None, verbose: bool) -> Summary:
    """Run every check group, printing each as it completes, then the summary."""
    console = ctx.console
    service = VerifyService(root=ctx.root, layout=ctx.layout, timeout=timeout)

    console.print("🔍 Verifying evmgateway development environment...")
    console.print(f"workspace: {ctx.root}", Style.DIM)
    if verbose:
        _print_layout(ctx, timeout)

    started = time.perf_counter()
    last = started

    def on_group(outcome: GroupOutcome) -> None:
        nonlocal last
        print_group(outcome, console)
        if verbose:
            now = time.perf_counter()
            console.print(f"({outcome.group.key}: {now - last:.2f}s)", Style.DIM)
            last = now

    report = service.run(on_group=on_group)
    if report.aborted:
        print_aborted(console)

    summary = Summary.from_results(
        report.results,
        aborted=report.aborted,
        warn_threshold=ctx.layout.ready_warn_threshold,
    )
    print_summary(summary, console)
    if verbose:
        console.print(f"completed in {time.perf_counter() - started:.2f}s", Style.DIM)
    return summary


def _print_layout(ctx: CLIContext, timeout: float | None) -> None:
    layout = ctx.layout
    console = ctx.console
    console.print(f"packages: {', '.join(layout.packages)}", Style.DIM)
    console.print(f"core package: {layout.core_package}", Style.DIM)
    console.print(f"build dirs: {', '.join(layout.build_dirs)}", Style.DIM)
    console.print(f"command timeout: {timeout or layout.command_timeout}s", Style.DIM)
    console.print(f"ready warning threshold: {layout.ready_warn_threshold}", Style.DIM)

"""Report rendering.

One line per result (``<glyph> <name>: <message>``, details indented below)
and a fixed-format summary block at the end.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from devverify.output.console import Style
from devverify.services.checkers import CheckStatus
from devverify.services.report import Verdict

if TYPE_CHECKING:
    from devverify.output.console import ConsoleProtocol
    from devverify.services.checkers import CheckResult, GroupOutcome
    from devverify.services.report import Summary

__all__ = [
    "GLYPHS",
    "format_result",
    "print_aborted",
    "print_group",
    "print_result",
    "print_summary",
]

GLYPHS: dict[CheckStatus, str] = {
    CheckStatus.PASS: "✅",
    CheckStatus.WARN: "⚠️",
    CheckStatus.FAIL: "❌",
}

RULE = "=" * 60


def format_result(result: CheckResult) -> str:
    return f"{GLYPHS[result.status]} {result.name}: {result.message}"


def _style_for_status(status: CheckStatus) -> Style:
    if status == CheckStatus.PASS:
        return Style.SUCCESS
    if status == CheckStatus.WARN:
        return Style.WARNING
    return Style.ERROR


def print_result(result: CheckResult, console: ConsoleProtocol) -> None:
    console.print(format_result(result), _style_for_status(result.status))
    if result.details:
        console.print(f"   {result.details}", Style.DIM)


def print_group(outcome: GroupOutcome, console: ConsoleProtocol) -> None:
    console.header(outcome.group.title)
    for result in outcome.results:
        print_result(result, console)
    if not outcome.ok and outcome.group.unmet_message:
        message = outcome.group.unmet_message
        console.print(f"{GLYPHS[CheckStatus.WARN]} {message}", Style.WARNING)


def print_aborted(console: ConsoleProtocol) -> None:
    console.newline()
    console.print("❌ Basic requirements not met. Please install missing tools.", Style.ERROR)


def print_summary(summary: Summary, console: ConsoleProtocol) -> None:
    """Print counts, verdict guidance and, when blocked, the critical failures."""
    console.newline()
    console.print(RULE, Style.BOLD)
    console.print("DEVELOPMENT ENVIRONMENT VERIFICATION SUMMARY", Style.BOLD)
    console.print(RULE, Style.BOLD)

    console.newline()
    console.print(f"📊 Results: {summary.passed}/{summary.total} checks passed")
    if summary.warned > 0:
        console.print(f"⚠️  {summary.warned} warnings", Style.WARNING)
    if summary.failed > 0:
        console.print(f"❌ {summary.failed} failures", Style.ERROR)

    console.newline()
    match summary.verdict:
        case Verdict.READY:
            console.print("🎉 Your development environment is ready!", Style.SUCCESS)
            console.newline()
            console.print("Next steps:")
            console.print("  1. Edit .env with your configuration")
            console.print("  2. Run: bun run test")
            console.print("  3. Start developing!")
        case Verdict.USABLE:
            console.print("✅ Your development environment is mostly ready!", Style.SUCCESS)
            console.print("Some optional components are missing but you can start developing.")
        case Verdict.BLOCKED:
            console.print("🔧 Your development environment needs attention.", Style.ERROR)
            console.print("Please resolve the failed checks above.")
            if summary.critical:
                console.newline()
                console.print("Critical issues to fix first:", Style.BOLD)
                for failure in summary.critical:
                    console.print(f"  • {failure.name}: {failure.message}", Style.ERROR)
                    if failure.details:
                        console.print(f"    {failure.details}", Style.DIM)

    console.newline()
    console.print("For help, see:")
    console.print("  • DEVELOPMENT.md - Comprehensive setup guide", Style.DIM)
    console.print("  • TROUBLESHOOTING.md - Common issues and solutions", Style.DIM)
    console.print("  • ./scripts/dev-setup.sh - Automated setup script", Style.DIM)

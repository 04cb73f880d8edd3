"""Tests for report rendering."""

from devverify.output.console import MockConsole, Style
from devverify.output.report import (
    format_result,
    print_aborted,
    print_group,
    print_result,
    print_summary,
)
from devverify.services.checkers import (
    CheckGroup,
    CheckResult,
    FileProbe,
    GroupMode,
    GroupOutcome,
)
from devverify.services.report import Summary


class TestResultLines:
    def test_format(self) -> None:
        result = CheckResult.passed("Package JSON", "Found package.json", "File (10 bytes)")
        assert format_result(result) == "✅ Package JSON: Found package.json"

    def test_glyphs(self) -> None:
        assert format_result(CheckResult.warning("a", "m")).startswith("⚠️ ")
        assert format_result(CheckResult.failure("a", "m")).startswith("❌ ")

    def test_details_indented(self) -> None:
        console = MockConsole()
        print_result(CheckResult.failure("Bun Installation", "bun not found", "install"), console)
        assert console.messages == ["❌ Bun Installation: bun not found", "   install"]
        assert console.outputs[0].style == Style.ERROR
        assert console.outputs[1].style == Style.DIM

    def test_no_details_line(self) -> None:
        console = MockConsole()
        print_result(CheckResult.passed("Dependencies", "5 packages installed"), console)
        assert len(console.outputs) == 1

    def test_group(self) -> None:
        group = CheckGroup("env", "Checking environment setup...", (FileProbe("E", ".env"),))
        outcome = GroupOutcome(group, (CheckResult.warning("Environment File", "Missing .env"),))
        console = MockConsole()
        print_group(outcome, console)
        assert console.messages[0] == "Checking environment setup..."
        assert console.messages[1] == "⚠️ Environment File: Missing .env"

    def test_unmet_group_line(self) -> None:
        group = CheckGroup(
            "ide",
            "Checking IDE setup...",
            (FileProbe("VS Code Settings", ".vscode/settings.json", required=False),),
            mode=GroupMode.ANY,
            unmet_message="No IDE configuration found",
        )
        missing = CheckResult.warning("VS Code Settings", "Missing .vscode/settings.json")
        console = MockConsole()
        print_group(GroupOutcome(group, (missing,)), console)
        assert console.messages[-1] == "⚠️ No IDE configuration found"
        assert console.outputs[-1].style == Style.WARNING

    def test_met_group_has_no_extra_line(self) -> None:
        group = CheckGroup(
            "ide",
            "Checking IDE setup...",
            (FileProbe("VS Code Settings", ".vscode/settings.json", required=False),),
            mode=GroupMode.ANY,
            unmet_message="No IDE configuration found",
        )
        found = CheckResult.passed("VS Code Settings", "Found .vscode/settings.json")
        console = MockConsole()
        print_group(GroupOutcome(group, (found,)), console)
        assert not console.find("No IDE configuration found")

    def test_aborted(self) -> None:
        console = MockConsole()
        print_aborted(console)
        assert console.find("Basic requirements not met")


class TestSummaryBlock:
    def test_ready(self) -> None:
        console = MockConsole()
        print_summary(Summary.from_results([CheckResult.passed("a", "ok")]), console)
        assert console.find("Results: 1/1 checks passed")
        assert console.find("is ready!")
        assert not console.find("warnings")
        assert not console.find("Critical issues")

    def test_usable(self) -> None:
        results = [CheckResult.warning(f"w{i}", "meh") for i in range(3)]
        console = MockConsole()
        print_summary(Summary.from_results(results), console)
        assert console.find("Results: 0/3 checks passed")
        assert console.find("3 warnings")
        assert console.find("mostly ready")

    def test_blocked_lists_critical_first(self) -> None:
        results = [
            CheckResult.failure("TypeScript Config", "Missing tsconfig.json"),
            CheckResult.failure(
                "Core Package Build",
                "evm-gateway package not built",
                "Run: bun run workspace evm-gateway build",
                critical=True,
            ),
        ]
        console = MockConsole()
        print_summary(Summary.from_results(results), console)

        assert console.find("2 failures")
        assert console.find("needs attention")
        lines = console.messages
        start = lines.index("Critical issues to fix first:")
        assert lines[start + 1] == "  • Core Package Build: evm-gateway package not built"
        assert lines[start + 2] == "    Run: bun run workspace evm-gateway build"
        assert not console.find("• TypeScript Config")

    def test_blocked_without_critical(self) -> None:
        console = MockConsole()
        print_summary(Summary.from_results([CheckResult.failure("a", "bad")]), console)
        assert console.find("needs attention")
        assert not console.find("Critical issues")

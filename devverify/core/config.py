"""Workspace layout and its optional TOML overrides.

Every path, package name and threshold the checks look at lives in
``Layout``. The defaults describe the evmgateway workspace; a
``dev-verify.toml`` at the workspace root may override a subset:

    [workspace]
    packages = ["evm-gateway", "l1-gateway"]
    core_package = "evm-gateway"
    build_dirs = ["_cjs", "_esm", "_types", "dist"]

    [verify]
    ready_warn_threshold = 2
    command_timeout = 10.0
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_int, get_str, get_str_tuple, get_table

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_COMMAND_TIMEOUT",
    "DEFAULT_PACKAGES",
    "READY_WARN_THRESHOLD",
    "ConfigError",
    "IdeFile",
    "Layout",
    "ToolSpec",
    "load_layout",
    "load_layout_or_default",
]

CONFIG_FILENAME = "dev-verify.toml"

# More warnings than this and a clean run is only "usable", not "ready".
READY_WARN_THRESHOLD = 2

# Seconds any single external command may take before its probe gives up.
DEFAULT_COMMAND_TIMEOUT = 10.0

DEFAULT_PACKAGES: tuple[str, ...] = (
    "evm-gateway",
    "evm-verifier",
    "l1-gateway",
    "l1-verifier",
    "op-gateway",
    "op-verifier",
    "arb-gateway",
    "arb-verifier",
    "scroll-gateway",
    "scroll-verifier",
)


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the layout file cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """An executable the workspace needs, with its display label."""

    label: str
    command: tuple[str, ...]
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class IdeFile:
    label: str
    path: str


def _default_foundation() -> tuple[ToolSpec, ...]:
    return (
        ToolSpec("Node.js", ("node",), hint="Install Node.js: https://nodejs.org/"),
        ToolSpec("Bun", ("bun",), hint="Install Bun: curl -fsSL https://bun.sh/install | bash"),
        ToolSpec("Git", ("git",), hint="Install Git: https://git-scm.com/"),
    )


def _default_ide_files() -> tuple[IdeFile, ...]:
    return (
        IdeFile("VS Code Workspace", "evmgateway.code-workspace"),
        IdeFile("VS Code Settings", ".vscode/settings.json"),
        IdeFile("VS Code Launch Config", ".vscode/launch.json"),
    )


@dataclass(frozen=True, slots=True)
class Layout:
    """Fixed, known set of names the verification looks for."""

    foundation: tuple[ToolSpec, ...] = field(default_factory=_default_foundation)

    manifest: str = "package.json"
    type_config: str = "tsconfig.json"
    lint_config: str = ".eslintrc.json"
    format_config: str = ".prettierrc"

    dependency_root: str = "node_modules"
    dependency_query: str = "bun pm ls 2>/dev/null | wc -l"

    packages: tuple[str, ...] = DEFAULT_PACKAGES
    build_dirs: tuple[str, ...] = ("_cjs", "_esm", "_types", "dist")
    core_package: str = "evm-gateway"
    core_build_dirs: tuple[str, ...] = ("_cjs", "_esm", "_types")

    type_checker: ToolSpec = ToolSpec(
        "TypeScript", ("bunx", "tsc"), hint="Check TypeScript installation and configuration"
    )
    linter: ToolSpec = ToolSpec("ESLint", ("bunx", "eslint"), hint="Linting may not work properly")

    env_file: str = ".env"
    env_template: str = ".env.example"

    ide_files: tuple[IdeFile, ...] = field(default_factory=_default_ide_files)

    vcs_dir: str = ".git"
    hook_dir: str = ".husky"

    ready_warn_threshold: int = READY_WARN_THRESHOLD
    command_timeout: float = DEFAULT_COMMAND_TIMEOUT

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Layout:
        """Create a Layout from parsed TOML, keeping defaults for absent keys.

        Raises:
            ValueError: A present key has the wrong type, is empty, or is out of range.
        """
        default = cls()
        workspace = _section(data, "workspace")
        verify = _section(data, "verify")

        threshold = _present(verify, "ready_warn_threshold", get_int, "an integer")
        if threshold is not None and threshold < 0:
            raise ValueError("ready_warn_threshold must be >= 0")
        timeout = _present(verify, "command_timeout", get_float, "a number")
        if timeout is not None and timeout <= 0:
            raise ValueError("command_timeout must be > 0")

        packages = _present(workspace, "packages", _names, "a non-empty list of names")
        build_dirs = _present(workspace, "build_dirs", _names, "a non-empty list of names")
        core_build_dirs = _present(
            workspace, "core_build_dirs", _names, "a non-empty list of names"
        )
        core_package = _present(workspace, "core_package", get_str, "a non-empty string")

        return cls(
            packages=packages or default.packages,
            build_dirs=build_dirs or default.build_dirs,
            core_package=core_package or default.core_package,
            core_build_dirs=core_build_dirs or default.core_build_dirs,
            ready_warn_threshold=default.ready_warn_threshold if threshold is None else threshold,
            command_timeout=default.command_timeout if timeout is None else timeout,
        )


def _section(data: Mapping[str, object], key: str) -> StrDict:
    if key not in data:
        return {}
    table = get_table(data, key)
    if table is None:
        raise ValueError(f"[{key}] must be a table")
    return table


def _names(table: Mapping[str, object], key: str) -> tuple[str, ...] | None:
    return get_str_tuple(table, key) or None


def _present[T](
    table: Mapping[str, object],
    key: str,
    getter: Callable[[Mapping[str, object], str], T | None],
    expected: str,
) -> T | None:
    """Narrow ``table[key]`` with ``getter``; a present key that fails to narrow is an error."""
    if key not in table:
        return None
    value = getter(table, key)
    if value is None:
        raise ValueError(f"{key} must be {expected}")
    return value


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data = as_str_dict(tomllib.loads(path.read_text(encoding="utf-8")))
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_layout(path: Path) -> Result[Layout, ConfigError]:
    """Load layout overrides from a TOML file.

    Args:
        path: Path to dev-verify.toml

    Returns:
        Ok(Layout) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Layout.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_layout_or_default(root: Path) -> Result[Layout, ConfigError]:
    """Load ``dev-verify.toml`` from ``root`` if present.

    A missing file is not an error: the default layout is returned as Ok.
    """
    path = root / CONFIG_FILENAME
    if not path.exists():
        return Ok(Layout())
    return load_layout(path)

"""Tests for Layout and dev-verify.toml loading."""

from pathlib import Path

import pytest

from devverify.core.config import (
    DEFAULT_PACKAGES,
    READY_WARN_THRESHOLD,
    Layout,
    load_layout,
    load_layout_or_default,
)
from devverify.core.result import Err, Ok


class TestLayoutDefaults:
    def test_default_packages(self) -> None:
        layout = Layout()
        assert layout.packages == DEFAULT_PACKAGES
        assert len(layout.packages) == 10
        assert layout.core_package == "evm-gateway"
        assert layout.core_package in layout.packages

    def test_default_threshold(self) -> None:
        assert Layout().ready_warn_threshold == READY_WARN_THRESHOLD == 2

    def test_foundation_tools(self) -> None:
        labels = [t.label for t in Layout().foundation]
        assert labels == ["Node.js", "Bun", "Git"]


class TestLayoutFromDict:
    def test_empty_dict_gives_defaults(self) -> None:
        assert Layout.from_dict({}) == Layout()

    def test_overrides(self) -> None:
        layout = Layout.from_dict(
            {
                "workspace": {
                    "packages": ["core", "plugin"],
                    "core_package": "core",
                    "build_dirs": ["dist"],
                },
                "verify": {"ready_warn_threshold": 0, "command_timeout": 3},
            }
        )
        assert layout.packages == ("core", "plugin")
        assert layout.core_package == "core"
        assert layout.build_dirs == ("dist",)
        assert layout.ready_warn_threshold == 0
        assert layout.command_timeout == 3.0

    def test_wrong_type_list_rejected(self) -> None:
        with pytest.raises(ValueError, match="packages"):
            Layout.from_dict({"workspace": {"packages": "core"}})

    def test_non_string_items_rejected(self) -> None:
        with pytest.raises(ValueError, match="build_dirs"):
            Layout.from_dict({"workspace": {"build_dirs": [1, 2]}})

    def test_empty_package_list_rejected(self) -> None:
        with pytest.raises(ValueError, match="packages"):
            Layout.from_dict({"workspace": {"packages": []}})

    def test_blank_core_package_rejected(self) -> None:
        with pytest.raises(ValueError, match="core_package"):
            Layout.from_dict({"workspace": {"core_package": "  "}})

    def test_wrong_type_timeout_rejected(self) -> None:
        with pytest.raises(ValueError, match="command_timeout"):
            Layout.from_dict({"verify": {"command_timeout": "fast"}})

    def test_section_must_be_table(self) -> None:
        with pytest.raises(ValueError, match=r"\[verify\]"):
            Layout.from_dict({"verify": 3})


class TestLoadLayout:
    def test_missing_file_is_default(self, tmp_path: Path) -> None:
        result = load_layout_or_default(tmp_path)
        assert isinstance(result, Ok)
        assert result.value == Layout()

    def test_loads_file(self, tmp_path: Path) -> None:
        (tmp_path / "dev-verify.toml").write_text(
            '[workspace]\npackages = ["a"]\ncore_package = "a"\n', encoding="utf-8"
        )
        result = load_layout_or_default(tmp_path)
        assert isinstance(result, Ok)
        assert result.value.packages == ("a",)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "dev-verify.toml"
        path.write_text("[workspace\n", encoding="utf-8")
        result = load_layout(path)
        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_negative_threshold_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "dev-verify.toml"
        path.write_text("[verify]\nready_warn_threshold = -1\n", encoding="utf-8")
        result = load_layout(path)
        assert isinstance(result, Err)
        assert "Invalid config structure" in result.error.message

    def test_empty_list_in_file_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "dev-verify.toml"
        path.write_text("[workspace]\npackages = []\n", encoding="utf-8")
        result = load_layout(path)
        assert isinstance(result, Err)
        assert "packages must be a non-empty list" in result.error.message

    def test_config_path_is_directory(self, tmp_path: Path) -> None:
        (tmp_path / "dev-verify.toml").mkdir()
        result = load_layout_or_default(tmp_path)
        assert isinstance(result, Err)
        assert "Error reading config" in result.error.message

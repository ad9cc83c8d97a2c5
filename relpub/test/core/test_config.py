"""Tests for relpub.core.config and relpub.core.graph."""

from __future__ import annotations

from pathlib import Path

import pytest

from relpub.core.config import ConfigError, load_config
from relpub.core.graph import TargetConfig, build_project_graph, project_has_target
from relpub.core.result import Err, Ok


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "relpub.toml"
    path.write_text(
        """
[projects.lib]
root = "packages/lib"

[projects.lib.targets.build]
command = "make build"

[projects.lib.targets.nx-release-publish]
command = "npm publish"
depends_on = ["build"]

[projects.app]
root = "packages/app"
dependencies = ["lib"]

[release.groups.all]
projects = ["*"]
""",
        encoding="utf-8",
    )
    return path


class TestLoadConfig:
    def test_loads_graph_and_raw_release(self, config_file: Path) -> None:
        result = load_config(config_file)

        assert isinstance(result, Ok)
        graph = result.value.graph
        assert graph.project_names == ("lib", "app")
        lib = graph.nodes["lib"]
        assert lib.root == "packages/lib"
        assert lib.targets["nx-release-publish"] == TargetConfig(
            command="npm publish", depends_on=("build",)
        )
        assert project_has_target(lib, "build")
        assert not project_has_target(graph.nodes["app"], "build")
        assert graph.nodes["app"].dependencies == ("lib",)
        assert result.value.release == {"groups": {"all": {"projects": ["*"]}}}

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "relpub.toml"
        result = load_config(path)
        assert result == Err(ConfigError(f"Config file not found: {path}", path=path))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "relpub.toml"
        path.write_text("[projects\n", encoding="utf-8")
        result = load_config(path)
        assert isinstance(result, Err)
        assert "Invalid TOML syntax" in result.error.message

    def test_release_must_be_table(self, tmp_path: Path) -> None:
        path = tmp_path / "relpub.toml"
        path.write_text('release = "all"\n', encoding="utf-8")
        result = load_config(path)
        assert isinstance(result, Err)
        assert result.error.message == "[release] must be a table"

    def test_empty_file_is_an_empty_workspace(self, tmp_path: Path) -> None:
        path = tmp_path / "relpub.toml"
        path.write_text("", encoding="utf-8")
        result = load_config(path)
        assert isinstance(result, Ok)
        assert result.value.graph.project_names == ()
        assert result.value.release == {}


class TestBuildProjectGraph:
    def test_root_defaults_to_name(self) -> None:
        result = build_project_graph({"lib": {}})
        assert isinstance(result, Ok)
        assert result.value.nodes["lib"].root == "lib"

    def test_unknown_dependency(self) -> None:
        result = build_project_graph({"app": {"dependencies": ["ghost"]}})
        assert isinstance(result, Err)
        assert "unknown project 'ghost'" in result.error.message

    def test_target_requires_command(self) -> None:
        result = build_project_graph({"lib": {"targets": {"build": {"depends_on": []}}}})
        assert isinstance(result, Err)
        assert result.error.message == "projects.lib.targets.build.command must be a string"

    def test_depends_on_must_be_strings(self) -> None:
        result = build_project_graph(
            {"lib": {"targets": {"build": {"command": "make", "depends_on": "x"}}}}
        )
        assert isinstance(result, Err)
        assert "depends_on" in result.error.message

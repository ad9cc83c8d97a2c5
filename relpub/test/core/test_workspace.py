"""Tests for relpub.core.workspace module."""

from __future__ import annotations

from pathlib import Path

import pytest

from relpub.core.result import Err, Ok
from relpub.core.workspace import (
    WORKSPACE_ENV_VAR,
    Workspace,
    detect_workspace,
    find_workspace_upward,
    is_workspace_root,
)


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    (tmp_path / "relpub.toml").write_text("", encoding="utf-8")
    (tmp_path / "packages" / "lib").mkdir(parents=True)
    return tmp_path


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(WORKSPACE_ENV_VAR, raising=False)


class TestWorkspace:
    def test_paths(self, tmp_path: Path) -> None:
        ws = Workspace(root=tmp_path)
        assert ws.config_path == tmp_path / "relpub.toml"
        assert ws.dotenv_path == tmp_path / ".env"
        assert ws.default_graph_path == tmp_path / ".relpub" / "graph.html"
        assert str(ws) == str(tmp_path)


class TestDetection:
    def test_is_workspace_root(self, temp_workspace: Path) -> None:
        assert is_workspace_root(temp_workspace)
        assert not is_workspace_root(temp_workspace / "packages")

    def test_find_upward(self, temp_workspace: Path) -> None:
        assert find_workspace_upward(temp_workspace / "packages" / "lib") == temp_workspace

    def test_detect_from_nested_dir(self, temp_workspace: Path) -> None:
        result = detect_workspace(start_dir=temp_workspace / "packages" / "lib")
        assert result == Ok(Workspace(root=temp_workspace.resolve()))

    def test_env_var_wins(self, temp_workspace: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(WORKSPACE_ENV_VAR, str(temp_workspace))
        result = detect_workspace(start_dir=Path("/"))
        assert result == Ok(Workspace(root=temp_workspace.resolve()))

    def test_invalid_env_var(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(WORKSPACE_ENV_VAR, str(tmp_path))
        result = detect_workspace()
        assert isinstance(result, Err)
        assert WORKSPACE_ENV_VAR in result.error.message

    def test_not_found(self, tmp_path: Path) -> None:
        result = detect_workspace(start_dir=tmp_path)
        assert isinstance(result, Err)
        assert "relpub.toml not found in" in result.error.message

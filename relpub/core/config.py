"""Workspace file loading.

relpub.toml holds two top-level tables: ``[projects]`` (turned into the
project graph here) and ``[release]`` (kept raw; the release layer applies
defaults and validates it against the graph).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .graph import ProjectGraph, build_project_graph
from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_table

__all__ = [
    "ConfigError",
    "WorkspaceConfig",
    "load_config",
]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when relpub.toml cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class WorkspaceConfig:
    """Parsed relpub.toml."""

    graph: ProjectGraph
    release: StrDict = field(default_factory=dict)


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling import and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[WorkspaceConfig, ConfigError]:
    """Load relpub.toml into the project graph and the raw release table.

    Args:
        path: Path to relpub.toml

    Returns:
        Ok(WorkspaceConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    data = result.value

    if "projects" in data and get_table(data, "projects") is None:
        return Err(ConfigError("[projects] must be a table", path=path))
    if "release" in data and get_table(data, "release") is None:
        return Err(ConfigError("[release] must be a table", path=path))

    graph = build_project_graph(get_table(data, "projects") or {})
    if isinstance(graph, Err):
        return Err(ConfigError(graph.error.message, path=path))

    return Ok(WorkspaceConfig(graph=graph.value, release=get_table(data, "release") or {}))

"""Workspace root and its well-known paths.

The root of a multi-project repository holds `relpub.toml`, which declares
the projects and the release groups. Optional siblings:

- `.env`, loaded into every publish task
- `.relpub/`, generated artifacts such as the task graph preview
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result

__all__ = [
    "WORKSPACE_FILE",
    "WORKSPACE_ENV_VAR",
    "Workspace",
    "WorkspaceError",
    "detect_workspace",
    "find_workspace_upward",
    "is_workspace_root",
]

WORKSPACE_FILE = "relpub.toml"
WORKSPACE_ENV_VAR = "RELPUB_WORKSPACE_ROOT"


@dataclass(frozen=True, slots=True)
class WorkspaceError:
    message: str
    searched_from: Path | None = None


@dataclass(frozen=True, slots=True)
class Workspace:
    root: Path

    @property
    def config_path(self) -> Path:
        return self.root / WORKSPACE_FILE

    @property
    def dotenv_path(self) -> Path:
        return self.root / ".env"

    @property
    def default_graph_path(self) -> Path:
        """Task graph preview target when no --graph-file is given."""
        return self.root / ".relpub" / "graph.html"

    def __str__(self) -> str:
        return str(self.root)


def is_workspace_root(path: Path) -> bool:
    return (path / WORKSPACE_FILE).is_file()


def find_workspace_upward(start: Path) -> Path | None:
    """Closest directory at or above ``start`` holding relpub.toml."""
    return next((d for d in (start, *start.parents) if is_workspace_root(d)), None)


def detect_workspace(
    *,
    start_dir: Path | None = None,
    env_var: str = WORKSPACE_ENV_VAR,
) -> Result[Workspace, WorkspaceError]:
    """Locate the workspace.

    $RELPUB_WORKSPACE_ROOT wins when set; it must then point at a valid
    root. Otherwise search upward from ``start_dir`` (default: cwd).
    """
    pinned = os.environ.get(env_var)
    if pinned:
        root = Path(pinned).expanduser().resolve()
        if not is_workspace_root(root):
            return Err(
                WorkspaceError(
                    f"${env_var} points to '{pinned}', which has no {WORKSPACE_FILE}",
                    searched_from=root,
                )
            )
        return Ok(Workspace(root=root))

    origin = (start_dir or Path.cwd()).resolve()
    found = find_workspace_upward(origin)
    if found is None:
        return Err(
            WorkspaceError(
                f"{WORKSPACE_FILE} not found in {origin} or any parent directory",
                searched_from=origin,
            )
        )
    return Ok(Workspace(root=found))

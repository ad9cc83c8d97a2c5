"""Project graph of a workspace.

Each project declares a root directory, the targets it exposes (named
commands such as ``build`` or ``nx-release-publish``) and the workspace
projects it depends on:

    [projects.pkg-a]
    root = "packages/pkg-a"
    dependencies = ["pkg-b"]

    [projects.pkg-a.targets.nx-release-publish]
    command = "npm publish"
    depends_on = ["build", "^nx-release-publish"]
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list

__all__ = [
    "GraphError",
    "ProjectGraph",
    "ProjectNode",
    "TargetConfig",
    "build_project_graph",
    "project_has_target",
]


@dataclass(frozen=True, slots=True)
class GraphError:
    """Invalid [projects] table."""

    message: str


@dataclass(frozen=True, slots=True)
class TargetConfig:
    """A runnable target of a project.

    Attributes:
        command: Shell-style command line, run from the project root.
        depends_on: Targets that must run first. A bare name refers to a
            target of the same project, ``^name`` to that target on every
            dependency project that exposes it.
    """

    command: str
    depends_on: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ProjectNode:
    name: str
    root: str
    targets: Mapping[str, TargetConfig] = field(default_factory=dict)
    dependencies: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ProjectGraph:
    """All projects of the workspace, in declaration order."""

    nodes: Mapping[str, ProjectNode]

    @property
    def project_names(self) -> tuple[str, ...]:
        return tuple(self.nodes)


def project_has_target(project: ProjectNode, target: str) -> bool:
    return target in project.targets


def _parse_targets(project: str, table: StrDict) -> Result[dict[str, TargetConfig], GraphError]:
    targets: dict[str, TargetConfig] = {}
    for target_name, raw in table.items():
        target = as_str_dict(raw)
        if target is None:
            return Err(GraphError(f"projects.{project}.targets.{target_name} must be a table"))
        command = get_str(target, "command")
        if command is None:
            return Err(
                GraphError(f"projects.{project}.targets.{target_name}.command must be a string")
            )
        depends_on: list[str] = []
        if "depends_on" in target:
            parsed = get_str_list(target, "depends_on")
            if parsed is None:
                return Err(
                    GraphError(
                        f"projects.{project}.targets.{target_name}.depends_on "
                        "must be a list of strings"
                    )
                )
            depends_on = parsed
        targets[target_name] = TargetConfig(command=command, depends_on=tuple(depends_on))
    return Ok(targets)


def build_project_graph(projects: Mapping[str, object]) -> Result[ProjectGraph, GraphError]:
    """Build the project graph from the parsed [projects] table."""
    nodes: dict[str, ProjectNode] = {}

    for name, raw in projects.items():
        table = as_str_dict(raw)
        if table is None:
            return Err(GraphError(f"projects.{name} must be a table"))

        dependencies: list[str] = []
        if "dependencies" in table:
            parsed = get_str_list(table, "dependencies")
            if parsed is None:
                return Err(GraphError(f"projects.{name}.dependencies must be a list of strings"))
            dependencies = parsed

        targets: dict[str, TargetConfig] = {}
        targets_table = table.get("targets")
        if targets_table is not None:
            targets_dict = as_str_dict(targets_table)
            if targets_dict is None:
                return Err(GraphError(f"projects.{name}.targets must be a table"))
            parsed_targets = _parse_targets(name, targets_dict)
            if isinstance(parsed_targets, Err):
                return parsed_targets
            targets = parsed_targets.value

        nodes[name] = ProjectNode(
            name=name,
            root=get_str(table, "root") or name,
            targets=targets,
            dependencies=tuple(dependencies),
        )

    for node in nodes.values():
        for dep in node.dependencies:
            if dep not in nodes:
                return Err(GraphError(f"project '{node.name}' depends on unknown project '{dep}'"))

    return Ok(ProjectGraph(nodes=nodes))

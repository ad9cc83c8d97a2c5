"""Cross-layer contracts for the release bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from relpub.core.graph import ProjectNode
from relpub.core.workspace import Workspace
from relpub.output.console import ConsoleProtocol, Style

PUBLISH_TARGET = "nx-release-publish"

DRY_RUN_ENV_VAR = "RELPUB_DRY_RUN"
VERBOSE_ENV_VAR = "RELPUB_VERBOSE_LOGGING"

OverrideValue = str | int | float | bool | list[str]
Overrides = dict[str, OverrideValue]

OutputStyle = Literal["static", "stream"]


@dataclass(frozen=True, slots=True)
class PublishOptions:
    """Normalized publish request shared between the CLI and the API.

    ``overrides_unparsed`` carries the raw tokens the CLI did not recognize;
    they are forwarded to every publish task.
    """

    projects: tuple[str, ...] = ()
    groups: tuple[str, ...] = ()
    registry: str | None = None
    tag: str | None = None
    otp: str | None = None
    dry_run: bool = False
    first_release: bool = False
    verbose: bool = False
    graph: bool = False
    graph_file: str | None = None
    overrides_unparsed: tuple[str, ...] = ()

    @property
    def has_filter(self) -> bool:
        return bool(self.projects) or bool(self.groups)


@dataclass(frozen=True, slots=True)
class ExecutionContext:
    """Per-invocation state handed to every collaborator.

    Dry-run and verbose are carried here rather than in the orchestrator's
    own environment; ``env()`` renders them for spawned processes.
    """

    workspace: Workspace
    console: ConsoleProtocol
    dry_run: bool = False
    verbose: bool = False

    def env(self) -> dict[str, str]:
        out: dict[str, str] = {}
        if self.dry_run:
            out[DRY_RUN_ENV_VAR] = "true"
        if self.verbose:
            out[VERBOSE_ENV_VAR] = "true"
        return out

    def debug(self, message: str) -> None:
        if self.verbose:
            self.console.print(message, Style.DIM)


@dataclass(frozen=True, slots=True)
class DispatchRequest:
    """Everything the execution engine needs for one release group."""

    projects: tuple[ProjectNode, ...]
    targets: tuple[str, ...]
    overrides: Overrides
    exclude_task_dependencies: bool = False
    load_dot_env_files: bool = True
    output_style: OutputStyle = "static"

    @property
    def project_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.projects)

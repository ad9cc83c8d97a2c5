from __future__ import annotations

from dataclasses import dataclass

import typer

from relpub.core.errors import ErrorCode
from relpub.core.result import Err
from relpub.core.workspace import Workspace, detect_workspace
from relpub.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    workspace: Workspace
    console: ConsoleProtocol


def build_context() -> CLIContext:
    workspace_result = detect_workspace()
    if isinstance(workspace_result, Err):
        typer.echo(f"error: {workspace_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(
        workspace=workspace_result.value,
        console=RichConsole(),
    )

from __future__ import annotations

import os
from pathlib import Path

import typer

from relpub import __version__
from relpub.cli.commands.publish_cmd import publish
from relpub.core.errors import ErrorCode
from relpub.core.workspace import WORKSPACE_ENV_VAR, WORKSPACE_FILE, is_workspace_root


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)(publish)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    workspace: Path | None = typer.Option(
        None,
        "--workspace",
        help="Workspace root (overrides auto detection)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if workspace is not None:
        try:
            root = workspace.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --workspace: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not root.is_dir() or not is_workspace_root(root):
            typer.echo(
                f"error: --workspace '{root}' is not a valid workspace (missing {WORKSPACE_FILE})",
                err=True,
            )
            raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

        os.environ[WORKSPACE_ENV_VAR] = str(root)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def main() -> None:
    app()

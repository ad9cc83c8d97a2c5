"""Publish command - publish the projects of the selected release groups."""

from __future__ import annotations

from collections.abc import Callable

import typer

from relpub.cli.context import build_context
from relpub.core.errors import ErrorCode
from relpub.output.console import ConsoleProtocol
from relpub.output.errors import print_release_error, release_error_exit_code
from relpub.release.contracts import PublishOptions
from relpub.release.errors import ReleasePublishError
from relpub.services.release.publish import release_publish


def _split_csv(values: list[str] | None) -> tuple[str, ...]:
    out: list[str] = []
    for value in values or []:
        out.extend(item.strip() for item in value.split(",") if item.strip())
    return tuple(out)


def handle_errors(
    verbose: bool,
    console: ConsoleProtocol,
    fn: Callable[[], int],
) -> int:
    """Run ``fn`` and turn any error into a printed diagnostic and exit code."""
    try:
        return fn()
    except ReleasePublishError as e:
        print_release_error(e.error, console)
        if verbose:
            console.exception(e)
        return int(release_error_exit_code(e.error))
    except Exception as e:  # noqa: BLE001
        console.error(str(e) or type(e).__name__)
        if verbose:
            console.exception(e)
        return int(ErrorCode.USER_ERROR)


def shell_exit_code(status: int) -> int:
    """Exit code for a publish status; a task killed by signal N exits 128+N."""
    return 128 - status if status < 0 else status


def release_publish_cli_handler(options: PublishOptions) -> int:
    ctx = build_context()
    return handle_errors(
        options.verbose,
        ctx.console,
        lambda: release_publish(
            options,
            is_cli=True,
            workspace=ctx.workspace,
            console=ctx.console,
        ),
    )


def publish(
    ctx: typer.Context,
    projects: list[str] | None = typer.Option(
        None,
        "--projects",
        "-p",
        help="Projects to publish (names or globs, comma separated or repeated).",
    ),
    groups: list[str] | None = typer.Option(
        None,
        "--groups",
        "-g",
        help="Release groups to publish (comma separated or repeated).",
    ),
    registry: str | None = typer.Option(None, "--registry", help="Registry to publish to."),
    tag: str | None = typer.Option(None, "--tag", help="Distribution tag for the release."),
    otp: str | None = typer.Option(None, "--otp", help="One-time password for the registry."),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-d",
        help="Run publish tasks in dry-run mode.",
    ),
    first_release: bool = typer.Option(
        False,
        "--first-release",
        help="Mark this as the first release of the projects.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show diagnostic output."),
    graph: bool = typer.Option(
        False,
        "--graph",
        help="Show the task graph instead of publishing.",
    ),
    graph_file: str | None = typer.Option(
        None,
        "--graph-file",
        help="Write the task graph to this file (.json or .html).",
    ),
) -> None:
    """Publish the selected projects.

    Unknown options are forwarded to every publish task.
    """
    options = PublishOptions(
        projects=_split_csv(projects),
        groups=_split_csv(groups),
        registry=registry,
        tag=tag,
        otp=otp,
        dry_run=dry_run,
        first_release=first_release,
        verbose=verbose,
        graph=graph or graph_file is not None,
        graph_file=graph_file,
        overrides_unparsed=tuple(ctx.args),
    )

    status = shell_exit_code(release_publish_cli_handler(options))
    if status != 0:
        raise typer.Exit(code=status)

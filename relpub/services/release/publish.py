"""Publish dispatcher.

Decides what to hand to the execution engine and how to read its outcome:

1. load relpub.toml, resolve the release config, filter groups/projects;
2. per release group, in config order: build overrides, keep the projects
   exposing the publish target, then either render the task graph preview
   or dispatch once to the engine;
3. fold each group's exit status into the run-wide status.

Two channels are kept apart. Anything preventing the computation of *what*
to publish is a fatal ``Err`` that stops the run at once. A non-zero engine
status is a per-group outcome: it is recorded and the remaining groups are
still attempted.
"""

from __future__ import annotations

from collections.abc import Sequence

from relpub.core.config import WorkspaceConfig, load_config
from relpub.core.graph import ProjectGraph
from relpub.core.result import Err, Ok, Result
from relpub.core.workspace import Workspace, detect_workspace
from relpub.output.console import ConsoleProtocol, RichConsole
from relpub.release.contracts import (
    PUBLISH_TARGET,
    DispatchRequest,
    ExecutionContext,
    PublishOptions,
)
from relpub.release.errors import ReleaseError, ReleasePublishError
from relpub.services.release.config import DEFAULT_GROUP_NAME, resolve_release_config
from relpub.services.release.eligibility import require_publish_target
from relpub.services.release.filter import filter_release_groups
from relpub.services.release.graph import (
    GraphRenderer,
    GraphRequest,
    generate_graph,
    read_graph_file,
)
from relpub.services.release.overrides import build_publish_overrides
from relpub.services.release.runner import SubprocessTaskRunner, TaskRunner
from relpub.services.release.status import ExitStatus, Success, aggregate, exit_status_from_code

PUBLISH_FAILED_MESSAGE = "One or more of the selected projects could not be published"


def load_workspace_config(workspace: Workspace) -> Result[WorkspaceConfig, ReleaseError]:
    loaded = load_config(workspace.config_path)
    if isinstance(loaded, Err):
        return Err(ReleaseError(kind="workspace_invalid", message=loaded.error.message))
    return loaded


def run_publish_on_projects(
    options: PublishOptions,
    *,
    graph: ProjectGraph,
    project_names: Sequence[str],
    exclude_task_dependencies: bool,
    context: ExecutionContext,
    runner: TaskRunner,
    render_graph: GraphRenderer = generate_graph,
) -> Result[ExitStatus, ReleaseError]:
    """Dispatch one release group.

    Err means the run must stop (no project exposes the publish target, or
    the graph preview could not be planned). Ok carries the engine status.
    """
    projects_to_run = tuple(graph.nodes[name] for name in project_names)
    overrides = build_publish_overrides(options)
    targets = (PUBLISH_TARGET,)

    eligible = require_publish_target(projects_to_run, PUBLISH_TARGET)
    if isinstance(eligible, Err):
        return eligible
    projects_with_target = eligible.value

    if options.graph:
        names = tuple(p.name for p in projects_with_target)
        rendered = render_graph(
            GraphRequest(
                watch=False,
                all=False,
                open=True,
                view="tasks",
                targets=targets,
                projects=names,
                file=read_graph_file(options),
            ),
            names,
            graph=graph,
            context=context,
        )
        if isinstance(rendered, Err):
            return Err(ReleaseError(kind="config_invalid", message=rendered.error.message))
        return Ok(Success())

    request = DispatchRequest(
        projects=projects_with_target,
        targets=targets,
        overrides=overrides,
        exclude_task_dependencies=exclude_task_dependencies,
        load_dot_env_files=True,
        output_style="static",
    )
    context.debug(f"dispatching {PUBLISH_TARGET} for: {', '.join(request.project_names)}")
    status = runner.run(request, graph=graph, context=context)
    return Ok(exit_status_from_code(status))


def publish_release_groups(
    options: PublishOptions,
    *,
    workspace_config: WorkspaceConfig,
    context: ExecutionContext,
    runner: TaskRunner,
    render_graph: GraphRenderer = generate_graph,
) -> Result[int, ReleaseError]:
    """Run the publish flow and return the aggregated exit status."""
    graph = workspace_config.graph

    resolved = resolve_release_config(graph, workspace_config.release)
    if isinstance(resolved, Err):
        return resolved
    release_config = resolved.value

    filtered = filter_release_groups(graph, release_config, options.projects, options.groups)
    if isinstance(filtered, Err):
        return filtered
    selection = filtered.value

    # A narrowed selection must not publish projects outside it through
    # task dependencies.
    exclude_task_dependencies = options.has_filter

    statuses: list[ExitStatus] = []
    for group in selection.groups:
        if options.projects:
            project_names = selection.projects_for(group)
        else:
            project_names = group.projects

        if group.name != DEFAULT_GROUP_NAME:
            context.console.header(f'Publishing release group "{group.name}"')
        context.debug(f"projects: {', '.join(project_names)}")

        outcome = run_publish_on_projects(
            options,
            graph=graph,
            project_names=project_names,
            exclude_task_dependencies=exclude_task_dependencies,
            context=context,
            runner=runner,
            render_graph=render_graph,
        )
        if isinstance(outcome, Err):
            return outcome
        if options.graph:
            continue
        statuses.append(outcome.value)

    return Ok(aggregate(statuses))


def release_publish(
    options: PublishOptions,
    *,
    is_cli: bool = False,
    workspace: Workspace | None = None,
    console: ConsoleProtocol | None = None,
    runner: TaskRunner | None = None,
    render_graph: GraphRenderer = generate_graph,
) -> int:
    """Publish the selected projects.

    This is also the programmatic API. Fatal errors are raised as
    ReleasePublishError. A failed publish is returned as a non-zero status
    to the CLI (which has already shown the task output) and raised for
    programmatic callers.
    """
    if workspace is None:
        detected = detect_workspace()
        if isinstance(detected, Err):
            raise ReleasePublishError(
                ReleaseError(kind="workspace_invalid", message=detected.error.message)
            )
        workspace = detected.value

    loaded = load_workspace_config(workspace)
    if isinstance(loaded, Err):
        raise ReleasePublishError(loaded.error)

    context = ExecutionContext(
        workspace=workspace,
        console=console if console is not None else RichConsole(),
        dry_run=options.dry_run,
        verbose=options.verbose,
    )

    result = publish_release_groups(
        options,
        workspace_config=loaded.value,
        context=context,
        runner=runner if runner is not None else SubprocessTaskRunner(),
        render_graph=render_graph,
    )
    if isinstance(result, Err):
        raise ReleasePublishError(result.error)

    status = result.value
    if status != 0 and not is_cli:
        raise ReleasePublishError(
            ReleaseError(kind="publish_failed", message=PUBLISH_FAILED_MESSAGE)
        )
    return status

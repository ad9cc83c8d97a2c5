"""Task graph preview.

Instead of publishing, ``--graph`` writes the planned task graph of the
selected projects to a file (JSON or a standalone HTML page) and opens it.
"""

from __future__ import annotations

import html
import json
import webbrowser
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol

from relpub.core.graph import ProjectGraph
from relpub.core.result import Err, Ok, Result
from relpub.release.contracts import ExecutionContext, PublishOptions
from relpub.services.release.tasks import TaskGraph, TaskGraphError, plan_tasks

GraphView = Literal["tasks", "projects"]


@dataclass(frozen=True, slots=True)
class GraphRequest:
    watch: bool
    all: bool
    open: bool
    view: GraphView
    targets: tuple[str, ...]
    projects: tuple[str, ...]
    file: str | None = None


class GraphRenderer(Protocol):
    """Boundary to the visualization collaborator."""

    def __call__(
        self,
        request: GraphRequest,
        project_names: Sequence[str],
        *,
        graph: ProjectGraph,
        context: ExecutionContext,
    ) -> Result[Path, TaskGraphError]: ...


def read_graph_file(options: PublishOptions) -> str | None:
    """Destination requested for the graph preview, if any."""
    if options.graph_file is None:
        return None
    value = options.graph_file.strip()
    if not value or value == "true":
        return None
    return value


def graph_payload(request: GraphRequest, task_graph: TaskGraph) -> dict[str, object]:
    return {
        "view": request.view,
        "targets": list(request.targets),
        "projects": list(request.projects),
        "tasks": [
            {"id": t.id, "project": t.project, "target": t.target} for t in task_graph.tasks
        ],
        "dependencies": {k: list(v) for k, v in task_graph.dependencies.items()},
    }


def _render_html(payload: dict[str, object], task_graph: TaskGraph) -> str:
    rows: list[str] = []
    for task in task_graph.tasks:
        deps = task_graph.dependencies.get(task.id, ())
        after = ", ".join(html.escape(d) for d in deps) or "&mdash;"
        rows.append(f"<tr><td>{html.escape(task.id)}</td><td>{after}</td></tr>")
    data = html.escape(json.dumps(payload, indent=2))
    return (
        "<!doctype html>\n"
        '<html><head><meta charset="utf-8"><title>relpub task graph</title></head>\n'
        "<body>\n"
        "<h1>Task graph</h1>\n"
        "<table><thead><tr><th>Task</th><th>Runs after</th></tr></thead>\n"
        f"<tbody>{''.join(rows)}</tbody></table>\n"
        f'<script type="application/json" id="graph">{data}</script>\n'
        "</body></html>\n"
    )


def generate_graph(
    request: GraphRequest,
    project_names: Sequence[str],
    *,
    graph: ProjectGraph,
    context: ExecutionContext,
    opener: Callable[[str], object] = webbrowser.open_new_tab,
) -> Result[Path, TaskGraphError]:
    """Write the task graph for ``project_names`` and optionally open it.

    Returns the path written.
    """
    planned = plan_tasks(graph, project_names, request.targets)
    if isinstance(planned, Err):
        return planned
    task_graph = planned.value
    payload = graph_payload(request, task_graph)

    if request.file is not None:
        path = Path(request.file)
        if not path.is_absolute():
            path = context.workspace.root / path
    else:
        path = context.workspace.default_graph_path
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix == ".json":
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    else:
        path.write_text(_render_html(payload, task_graph), encoding="utf-8")

    context.console.info(f"task graph written to {path}")
    if request.open and path.suffix != ".json":
        opener(path.resolve().as_uri())

    return Ok(path)

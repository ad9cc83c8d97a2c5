"""Task planning shared by the execution engine and the graph preview.

A task is one target of one project. Planning expands ``depends_on``
entries into prerequisite tasks and orders everything so that a task always
comes after the tasks it depends on.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Literal

from relpub.core.graph import ProjectGraph
from relpub.core.result import Err, Ok, Result


@dataclass(frozen=True, slots=True)
class Task:
    project: str
    target: str

    @property
    def id(self) -> str:
        return f"{self.project}:{self.target}"


@dataclass(frozen=True, slots=True)
class TaskGraph:
    tasks: tuple[Task, ...]
    dependencies: Mapping[str, tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class TaskGraphError:
    message: str


_State = Literal["visiting", "done"]


def _prerequisites(graph: ProjectGraph, task: Task) -> list[Task]:
    node = graph.nodes[task.project]
    target = node.targets.get(task.target)
    if target is None:
        return []

    out: list[Task] = []
    for entry in target.depends_on:
        if entry.startswith("^"):
            name = entry[1:]
            for dep in node.dependencies:
                if name in graph.nodes[dep].targets:
                    out.append(Task(project=dep, target=name))
        elif entry in node.targets:
            out.append(Task(project=task.project, target=entry))
    return out


def plan_tasks(
    graph: ProjectGraph,
    projects: Sequence[str],
    targets: Sequence[str],
    *,
    exclude_task_dependencies: bool = False,
) -> Result[TaskGraph, TaskGraphError]:
    """Plan the tasks for ``targets`` on ``projects``.

    Projects lacking a requested target get no task for it. With
    ``exclude_task_dependencies`` only the requested tasks are planned.
    """
    requested = [
        Task(project=p, target=t)
        for p in projects
        for t in targets
        if t in graph.nodes[p].targets
    ]

    if exclude_task_dependencies:
        return Ok(
            TaskGraph(tasks=tuple(requested), dependencies={t.id: () for t in requested})
        )

    order: list[Task] = []
    state: dict[str, _State] = {}
    dependencies: dict[str, tuple[str, ...]] = {}

    def visit(task: Task, path: list[str]) -> TaskGraphError | None:
        seen = state.get(task.id)
        if seen == "done":
            return None
        if seen == "visiting":
            cycle = " -> ".join([*path[path.index(task.id) :], task.id])
            return TaskGraphError(f"circular task dependency: {cycle}")

        state[task.id] = "visiting"
        prereqs = _prerequisites(graph, task)
        dependencies[task.id] = tuple(p.id for p in prereqs)
        for prereq in prereqs:
            error = visit(prereq, [*path, task.id])
            if error is not None:
                return error
        state[task.id] = "done"
        order.append(task)
        return None

    for task in requested:
        error = visit(task, [])
        if error is not None:
            return Err(error)

    return Ok(TaskGraph(tasks=tuple(order), dependencies=dependencies))

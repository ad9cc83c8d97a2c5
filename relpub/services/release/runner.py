"""Execution engine: runs the planned tasks of one dispatch request.

Tasks run one after another in planned order. A failing task does not stop
the run, but every task depending on it is skipped.
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Protocol

from dotenv import dotenv_values

from relpub.core.graph import ProjectGraph
from relpub.core.result import Err
from relpub.output.console import Style
from relpub.platform.process import run_streaming
from relpub.release.contracts import DispatchRequest, ExecutionContext
from relpub.services.release.overrides import overrides_to_args
from relpub.services.release.tasks import Task, plan_tasks


class TaskRunner(Protocol):
    """Boundary to the execution engine.

    Returns the exit status of the whole request: 0 on success.
    """

    def run(
        self,
        request: DispatchRequest,
        *,
        graph: ProjectGraph,
        context: ExecutionContext,
    ) -> int: ...


def _read_dotenv(path: Path) -> dict[str, str]:
    if not path.is_file():
        return {}
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


class SubprocessTaskRunner:
    """Runs each task's command in its project root."""

    def run(
        self,
        request: DispatchRequest,
        *,
        graph: ProjectGraph,
        context: ExecutionContext,
    ) -> int:
        console = context.console
        planned = plan_tasks(
            graph,
            request.project_names,
            request.targets,
            exclude_task_dependencies=request.exclude_task_dependencies,
        )
        if isinstance(planned, Err):
            console.error(planned.error.message)
            return 1
        task_graph = planned.value

        base_env = dict(os.environ)
        if request.load_dot_env_files:
            base_env.update(_read_dotenv(context.workspace.dotenv_path))

        failed: dict[str, int] = {}
        last_failure = 0

        for task in task_graph.tasks:
            blocked = [d for d in task_graph.dependencies.get(task.id, ()) if d in failed]
            if blocked:
                console.warning(f"{task.id}: skipped ({blocked[0]} failed)")
                failed[task.id] = failed[blocked[0]]
                continue

            code = self._run_task(task, request, graph=graph, context=context, base_env=base_env)
            if code != 0:
                failed[task.id] = code
                last_failure = code

        ran = len(task_graph.tasks)
        if failed:
            console.error(f"{len(failed)} of {ran} task(s) failed or were skipped")
        elif request.output_style == "static":
            console.success(f"{ran} task(s) succeeded")
        return last_failure

    def _run_task(
        self,
        task: Task,
        request: DispatchRequest,
        *,
        graph: ProjectGraph,
        context: ExecutionContext,
        base_env: dict[str, str],
    ) -> int:
        node = graph.nodes[task.project]
        target = node.targets[task.target]
        cwd = context.workspace.root / node.root

        cmd = shlex.split(target.command)
        if task.target in request.targets:
            cmd += overrides_to_args(request.overrides)

        env = dict(base_env)
        if request.load_dot_env_files:
            env.update(_read_dotenv(cwd / ".env"))
        env.update(context.env())

        if request.output_style == "static":
            context.console.header(f"> {task.id}")
        context.debug(f"$ {shlex.join(cmd)}  (cwd: {cwd})")

        result = run_streaming(cmd, cwd=cwd, env=env)
        if isinstance(result, Err):
            context.console.error(f"{task.id}: {result.error}")
            return result.error.returncode if result.error.started else 1

        context.console.print(f"{task.id}: done", Style.SUCCESS)
        return 0

from __future__ import annotations

from relpub.core.graph import ProjectGraph, ProjectNode, TargetConfig
from relpub.core.result import Err, Ok
from relpub.release.contracts import PUBLISH_TARGET
from relpub.services.release.tasks import plan_tasks


def _graph() -> ProjectGraph:
    return ProjectGraph(
        nodes={
            "app": ProjectNode(
                name="app",
                root="app",
                dependencies=("lib", "docs"),
                targets={
                    "build": TargetConfig(command="make"),
                    PUBLISH_TARGET: TargetConfig(
                        command="publish",
                        depends_on=("build", f"^{PUBLISH_TARGET}"),
                    ),
                },
            ),
            "lib": ProjectNode(
                name="lib",
                root="lib",
                targets={PUBLISH_TARGET: TargetConfig(command="publish")},
            ),
            "docs": ProjectNode(name="docs", root="docs"),
        }
    )


def test_dependencies_come_first() -> None:
    result = plan_tasks(_graph(), ["app"], [PUBLISH_TARGET])

    assert isinstance(result, Ok)
    ids = [t.id for t in result.value.tasks]
    assert ids == ["app:build", f"lib:{PUBLISH_TARGET}", f"app:{PUBLISH_TARGET}"]
    assert result.value.dependencies[f"app:{PUBLISH_TARGET}"] == (
        "app:build",
        f"lib:{PUBLISH_TARGET}",
    )


def test_shared_dependencies_are_planned_once() -> None:
    result = plan_tasks(_graph(), ["lib", "app"], [PUBLISH_TARGET])
    assert isinstance(result, Ok)
    ids = [t.id for t in result.value.tasks]
    assert ids.count(f"lib:{PUBLISH_TARGET}") == 1


def test_excluded_dependencies_plan_only_requested_tasks() -> None:
    result = plan_tasks(_graph(), ["app", "lib"], [PUBLISH_TARGET], exclude_task_dependencies=True)
    assert isinstance(result, Ok)
    assert [t.id for t in result.value.tasks] == [f"app:{PUBLISH_TARGET}", f"lib:{PUBLISH_TARGET}"]


def test_projects_without_target_get_no_task() -> None:
    result = plan_tasks(_graph(), ["docs"], [PUBLISH_TARGET])
    assert isinstance(result, Ok)
    assert result.value.tasks == ()


def test_cycles_are_reported() -> None:
    graph = ProjectGraph(
        nodes={
            "a": ProjectNode(
                name="a",
                root="a",
                targets={
                    "x": TargetConfig(command="x", depends_on=("y",)),
                    "y": TargetConfig(command="y", depends_on=("x",)),
                },
            )
        }
    )
    result = plan_tasks(graph, ["a"], ["x"])
    assert isinstance(result, Err)
    assert result.error.message == "circular task dependency: a:x -> a:y -> a:x"

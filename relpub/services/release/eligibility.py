from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from relpub.core.graph import ProjectNode, project_has_target
from relpub.core.result import Err, Ok, Result
from relpub.release.contracts import PUBLISH_TARGET
from relpub.release.errors import ReleaseError


@dataclass(frozen=True, slots=True)
class TargetPartition:
    with_target: tuple[ProjectNode, ...]
    without_target: tuple[ProjectNode, ...]


def partition_by_target(projects: Sequence[ProjectNode], target: str) -> TargetPartition:
    with_target = tuple(p for p in projects if project_has_target(p, target))
    without_target = tuple(p for p in projects if not project_has_target(p, target))
    return TargetPartition(with_target=with_target, without_target=without_target)


def require_publish_target(
    projects: Sequence[ProjectNode],
    target: str = PUBLISH_TARGET,
) -> Result[tuple[ProjectNode, ...], ReleaseError]:
    """Keep the projects exposing ``target``.

    Projects without it are dropped silently as long as at least one project
    qualifies; when none does, every considered project is listed.
    """
    partition = partition_by_target(projects, target)
    if partition.with_target:
        return Ok(partition.with_target)

    listing = "\n".join(f"- {p.name}" for p in projects)
    return Err(
        ReleaseError(
            kind="missing_publish_target",
            message=(
                "Based on your config, the following projects were matched for publishing "
                f'but do not have the "{target}" target specified:\n{listing}'
            ),
            hint=(
                "This is usually caused by not having an appropriate plugin or publish "
                f'tooling installed, which would add the "{target}" target for you '
                "automatically. Declare it under "
                f"[projects.<name>.targets.{target}] in relpub.toml."
            ),
        )
    )

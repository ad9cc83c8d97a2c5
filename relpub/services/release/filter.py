from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from relpub.core.graph import ProjectGraph
from relpub.core.result import Err, Ok, Result
from relpub.release.errors import ReleaseError
from relpub.services.release.config import ReleaseConfig, ReleaseGroup, find_matching_projects


@dataclass(frozen=True, slots=True)
class FilteredGroups:
    """Groups selected for this run, in config order, with their selected members."""

    groups: tuple[ReleaseGroup, ...]
    group_to_projects: Mapping[str, tuple[str, ...]]

    def projects_for(self, group: ReleaseGroup) -> tuple[str, ...]:
        return self.group_to_projects.get(group.name, ())


def _filter_error(message: str, hint: str | None = None) -> Err[ReleaseError]:
    return Err(ReleaseError(kind="filter_invalid", message=message, hint=hint))


def select_all(config: ReleaseConfig) -> FilteredGroups:
    """No filter: every group, every member."""
    return FilteredGroups(
        groups=config.groups,
        group_to_projects={g.name: g.projects for g in config.groups},
    )


def filter_release_groups(
    graph: ProjectGraph,
    config: ReleaseConfig,
    projects_filter: Sequence[str] = (),
    groups_filter: Sequence[str] = (),
) -> Result[FilteredGroups, ReleaseError]:
    if projects_filter and groups_filter:
        return _filter_error(
            "The --projects and --groups options are mutually exclusive, "
            "please use one or the other."
        )

    if projects_filter:
        return _filter_by_projects(graph, config, projects_filter)

    if groups_filter:
        return _filter_by_groups(config, groups_filter)

    return Ok(select_all(config))


def _filter_by_projects(
    graph: ProjectGraph,
    config: ReleaseConfig,
    projects_filter: Sequence[str],
) -> Result[FilteredGroups, ReleaseError]:
    matched: list[str] = []
    for pattern in projects_filter:
        found = find_matching_projects([pattern], graph)
        if not found:
            return _filter_error(
                f'Your --projects filter "{pattern}" did not match any projects in the workspace',
                hint=f"Available projects: {', '.join(graph.project_names) or '(none)'}",
            )
        matched.extend(p for p in found if p not in matched)

    selected = set(matched)
    groups: list[ReleaseGroup] = []
    group_to_projects: dict[str, tuple[str, ...]] = {}
    grouped: set[str] = set()

    for group in config.groups:
        members = tuple(p for p in group.projects if p in selected)
        if not members:
            continue
        groups.append(group)
        group_to_projects[group.name] = members
        grouped.update(members)

    ungrouped = [p for p in matched if p not in grouped]
    if ungrouped:
        return _filter_error(
            "The following projects which match your projects filter "
            "did not match any configured release groups:\n"
            + "\n".join(f"- {p}" for p in ungrouped)
        )

    return Ok(FilteredGroups(groups=tuple(groups), group_to_projects=group_to_projects))


def _filter_by_groups(
    config: ReleaseConfig,
    groups_filter: Sequence[str],
) -> Result[FilteredGroups, ReleaseError]:
    wanted: set[str] = set()
    for name in groups_filter:
        if config.group(name) is None:
            return _filter_error(
                f'Release group "{name}" not found in relpub.toml',
                hint=f"Configured groups: {', '.join(config.group_names)}",
            )
        wanted.add(name)

    groups = tuple(g for g in config.groups if g.name in wanted)
    return Ok(
        FilteredGroups(
            groups=groups,
            group_to_projects={g.name: g.projects for g in groups},
        )
    )

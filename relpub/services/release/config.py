"""Release configuration: defaults and validation of the [release] table.

Release groups are declared under ``[release.groups.<name>]``. A workspace
without groups gets a single implicit group holding ``release.projects``
(every project when omitted).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Literal

from relpub.core.graph import ProjectGraph
from relpub.core.result import Err, Ok, Result
from relpub.core.structured import as_str_dict, get_str_list
from relpub.release.errors import ReleaseError

DEFAULT_GROUP_NAME = "__default__"

ProjectsRelationship = Literal["fixed", "independent"]


@dataclass(frozen=True, slots=True)
class ReleaseGroup:
    name: str
    projects: tuple[str, ...]
    projects_relationship: ProjectsRelationship = "fixed"


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Resolved release configuration, groups in declaration order."""

    groups: tuple[ReleaseGroup, ...]

    def group(self, name: str) -> ReleaseGroup | None:
        for g in self.groups:
            if g.name == name:
                return g
        return None

    @property
    def group_names(self) -> tuple[str, ...]:
        return tuple(g.name for g in self.groups)


def find_matching_projects(patterns: Iterable[str], graph: ProjectGraph) -> list[str]:
    """Resolve names, globs and ``!`` exclusions against the graph.

    Matches keep the graph's declaration order.
    """
    included: set[str] = set()
    excluded: set[str] = set()
    names = graph.project_names

    for raw in patterns:
        pattern = raw.strip()
        if not pattern:
            continue
        target = excluded if pattern.startswith("!") else included
        pattern = pattern.removeprefix("!")
        if pattern in graph.nodes:
            target.add(pattern)
            continue
        target.update(n for n in names if fnmatchcase(n, pattern))

    return [n for n in names if n in included and n not in excluded]


def _invalid(message: str, hint: str | None = None) -> Err[ReleaseError]:
    return Err(ReleaseError(kind="config_invalid", message=message, hint=hint))


def _parse_relationship(value: object, *, where: str) -> Result[ProjectsRelationship, ReleaseError]:
    if value is None:
        return Ok("fixed")
    if value == "fixed":
        return Ok("fixed")
    if value == "independent":
        return Ok("independent")
    return _invalid(
        f"{where}.projects_relationship must be 'fixed' or 'independent', got {value!r}"
    )


def _patterns(table: Mapping[str, object], *, where: str) -> Result[list[str], ReleaseError]:
    value = table.get("projects")
    if isinstance(value, str):
        return Ok([value])
    parsed = get_str_list(table, "projects")
    if parsed is None:
        return _invalid(f"{where}.projects must be a string or a list of strings")
    return Ok(parsed)


def resolve_release_config(
    graph: ProjectGraph,
    raw: Mapping[str, object],
) -> Result[ReleaseConfig, ReleaseError]:
    """Apply defaults to the raw [release] table and validate it against the graph."""
    groups_raw = raw.get("groups")

    if "projects" in raw and groups_raw is not None:
        return Err(
            ReleaseError(
                kind="projects_and_groups_defined",
                message="'release.projects' and 'release.groups' cannot both be defined",
                hint="Move the project patterns into the release groups instead.",
            )
        )

    if groups_raw is None:
        patterns: list[str] = list(graph.project_names)
        if "projects" in raw:
            parsed = _patterns(raw, where="release")
            if isinstance(parsed, Err):
                return parsed
            patterns = parsed.value
        relationship = _parse_relationship(raw.get("projects_relationship"), where="release")
        if isinstance(relationship, Err):
            return relationship
        matched = tuple(find_matching_projects(patterns, graph))
        # Nothing to release: no implicit group rather than an empty one.
        if not matched:
            return Ok(ReleaseConfig(groups=()))
        return Ok(
            ReleaseConfig(
                groups=(
                    ReleaseGroup(
                        name=DEFAULT_GROUP_NAME,
                        projects=matched,
                        projects_relationship=relationship.value,
                    ),
                )
            )
        )

    groups_table = as_str_dict(groups_raw)
    if groups_table is None:
        return _invalid("release.groups must be a table")

    groups: list[ReleaseGroup] = []
    owner: dict[str, str] = {}

    for name, group_raw in groups_table.items():
        where = f"release.groups.{name}"
        table = as_str_dict(group_raw)
        if table is None:
            return _invalid(f"{where} must be a table")

        parsed = _patterns(table, where=where)
        if isinstance(parsed, Err):
            return parsed
        matched = find_matching_projects(parsed.value, graph)
        if not matched:
            return Err(
                ReleaseError(
                    kind="group_matches_no_projects",
                    message=f'Release group "{name}" matches no projects',
                    hint=f"Patterns: {', '.join(parsed.value)}",
                )
            )

        for project in matched:
            previous = owner.get(project)
            if previous is not None:
                return Err(
                    ReleaseError(
                        kind="project_in_multiple_groups",
                        message=(
                            f'Project "{project}" matches both release groups '
                            f'"{previous}" and "{name}"'
                        ),
                        hint="A project can only belong to one release group.",
                    )
                )
            owner[project] = name

        relationship = _parse_relationship(table.get("projects_relationship"), where=where)
        if isinstance(relationship, Err):
            return relationship

        groups.append(
            ReleaseGroup(
                name=name,
                projects=tuple(matched),
                projects_relationship=relationship.value,
            )
        )

    return Ok(ReleaseConfig(groups=tuple(groups)))

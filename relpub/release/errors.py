"""Error types for the release bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "workspace_invalid",
    "config_invalid",
    "projects_and_groups_defined",
    "group_matches_no_projects",
    "project_in_multiple_groups",
    "filter_invalid",
    "missing_publish_target",
    "publish_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    This format is stable across the resolve, filter and dispatch steps and
    can be rendered by the CLI without importing implementation details.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message}\n\n{self.hint}"
        return self.message


class ReleasePublishError(Exception):
    """Raised by the programmatic publish API.

    Programmatic callers own their error handling, so fatal release errors
    and an aggregated publish failure both surface as this exception.
    """

    def __init__(self, error: ReleaseError) -> None:
        super().__init__(error.pretty())
        self.error = error

    @property
    def kind(self) -> ReleaseErrorKind:
        return self.error.kind

"""Exit status of group dispatches and their aggregation over a run.

The aggregate keeps the *latest* failure code: a later success never clears
a recorded failure, but a later failure replaces the recorded code. An
earlier, possibly more informative, failure can therefore be hidden by a
later one.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Success:
    @property
    def code(self) -> int:
        return 0


@dataclass(frozen=True, slots=True)
class Failure:
    code: int

    def __post_init__(self) -> None:
        if self.code == 0:
            raise ValueError("Failure requires a non-zero exit code")


type ExitStatus = Success | Failure


def exit_status_from_code(code: int | None) -> ExitStatus:
    """Map an engine return code onto ExitStatus.

    ``None`` is not a valid engine result and is treated as a failure (1).
    """
    if code is None:
        return Failure(1)
    if code == 0:
        return Success()
    return Failure(code)


@dataclass(slots=True)
class OverallStatus:
    """Mutable run-wide status, starting at success."""

    code: int = 0

    def record(self, status: ExitStatus) -> None:
        if isinstance(status, Failure):
            self.code = status.code


def aggregate(statuses: list[ExitStatus]) -> int:
    overall = OverallStatus()
    for status in statuses:
        overall.record(status)
    return overall.code

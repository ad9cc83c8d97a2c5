"""Error presentation utilities.

Centralized formatting and exit code mapping for release errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relpub.core.errors import ErrorCode
from relpub.output.console import Style
from relpub.release.errors import ReleaseError

if TYPE_CHECKING:
    from relpub.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print a release error with its hint."""
    console.error(error.message)
    if error.hint:
        console.print(error.hint, Style.DIM)


def release_error_exit_code(error: ReleaseError) -> ErrorCode:
    match error.kind:
        case "workspace_invalid":
            return ErrorCode.CONFIG_ERROR
        case "publish_failed":
            return ErrorCode.PUBLISH_ERROR
        case _:
            return ErrorCode.USER_ERROR

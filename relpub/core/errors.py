"""Process exit codes.

Used when a run is aborted before or outside of publishing. A completed
publish run exits with the status aggregated from the execution engine
instead.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1  # bad filter, invalid release config, missing publish target
    CONFIG_ERROR = 2  # no workspace, unreadable relpub.toml
    PUBLISH_ERROR = 3  # aggregated publish failure (programmatic API)

"""Platform abstraction layer."""

from .process import ProcessError, run_streaming

__all__ = [
    "ProcessError",
    "run_streaming",
]

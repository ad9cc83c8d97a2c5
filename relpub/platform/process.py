"""Subprocess execution with Result-based error handling.

Publish commands stream their output straight to the terminal; only the
exit code is captured.

Usage:
    result = run_streaming(["npm", "publish"], cwd=project_root, env=env)
    match result:
        case Ok(None):
            print("published")
        case Err(error):
            print(f"Failed: {error}")
"""

from __future__ import annotations

import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from relpub.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run_streaming"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process, negative when it was
            killed by a signal (-1 if it never started).
        stderr: Error details when the process could not be started.
        started: False only when the command could not be launched.
    """

    command: tuple[str, ...]
    returncode: int
    stderr: str = ""
    started: bool = True

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if not self.started:
            return f"{cmd_str} could not be started: {self.stderr}"
        if self.returncode < 0:
            return f"{cmd_str} killed by signal {-self.returncode}"
        return f"{cmd_str} failed (exit {self.returncode})"


def run_streaming(
    cmd: list[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command without capturing output.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Full environment for the child (uses current env if None).

    Returns:
        Ok(None) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=dict(env) if env is not None else None,
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stderr=str(e), started=False))

    if proc.returncode != 0:
        return Err(ProcessError(command=tuple(cmd), returncode=proc.returncode))

    return Ok(None)

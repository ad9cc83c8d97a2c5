"""Tests for relpub.platform.process module."""

from __future__ import annotations

import os
import signal
import sys
from pathlib import Path

import pytest

from relpub.core.result import Err, Ok
from relpub.platform.process import ProcessError, run_streaming


class TestRunStreaming:
    def test_success(self, tmp_path: Path) -> None:
        result = run_streaming([sys.executable, "-c", "pass"], cwd=tmp_path)
        assert result == Ok(None)

    def test_runs_in_cwd_with_env(self, tmp_path: Path) -> None:
        script = "import os, pathlib; pathlib.Path('out.txt').write_text(os.environ['RELPUB_X'])"
        env = {**os.environ, "RELPUB_X": "yes"}

        result = run_streaming([sys.executable, "-c", script], cwd=tmp_path, env=env)

        assert isinstance(result, Ok)
        assert (tmp_path / "out.txt").read_text() == "yes"

    def test_nonzero_exit(self, tmp_path: Path) -> None:
        result = run_streaming([sys.executable, "-c", "import sys; sys.exit(5)"], cwd=tmp_path)
        assert isinstance(result, Err)
        assert result.error.returncode == 5
        assert result.error.started

    def test_missing_binary(self, tmp_path: Path) -> None:
        result = run_streaming(["relpub-test-no-such-binary"], cwd=tmp_path)
        assert isinstance(result, Err)
        assert not result.error.started
        assert "could not be started" in str(result.error)

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
    def test_killed_by_signal_keeps_its_code(self, tmp_path: Path) -> None:
        script = "import os, signal; os.kill(os.getpid(), signal.SIGTERM)"
        result = run_streaming([sys.executable, "-c", script], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.started
        assert result.error.returncode == -signal.SIGTERM
        assert str(result.error).endswith(f"killed by signal {int(signal.SIGTERM)}")


class TestProcessError:
    def test_str_truncates_long_commands(self) -> None:
        error = ProcessError(command=("npm", "publish", "--tag", "next"), returncode=1)
        assert str(error) == "npm publish --tag ... failed (exit 1)"

"""Tests for the default command runner."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from ozdocs.process import CommandError, run_command


def test_run_command_captures_output(tmp_path: Path) -> None:
    output = run_command(
        [sys.executable, "-c", "import os; print(os.getcwd())"],
        cwd=tmp_path,
        capture_output=True,
    )

    assert Path(output.strip()).resolve() == tmp_path.resolve()


def test_run_command_passes_environment(tmp_path: Path) -> None:
    output = run_command(
        [sys.executable, "-c", "import os; print(os.environ['DISABLE_PREPARE_DOCS'])"],
        cwd=tmp_path,
        env={"DISABLE_PREPARE_DOCS": "true", "PATH": ""},
        capture_output=True,
    )

    assert output.strip() == "true"


def test_run_command_streams_by_default(tmp_path: Path) -> None:
    assert run_command([sys.executable, "-c", "print('streamed')"], cwd=tmp_path) == ""


def test_run_command_raises_with_child_status(tmp_path: Path) -> None:
    with pytest.raises(subprocess.CalledProcessError) as excinfo:
        run_command([sys.executable, "-c", "raise SystemExit(7)"], cwd=tmp_path)

    assert excinfo.value.returncode == 7


def test_run_command_reports_missing_executable(tmp_path: Path) -> None:
    with pytest.raises(CommandError, match="Could not run oz-docs-missing-binary"):
        run_command(["oz-docs-missing-binary", "--version"], cwd=tmp_path)

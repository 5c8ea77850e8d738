"""Child process invocation shared by the synchroniser and the driver."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, Mapping

from .logging import get_logger

Runner = Callable[..., str]

_logger = get_logger("process")


class CommandError(RuntimeError):
    """Raised when a command cannot be started, e.g. its executable is missing."""


def run_command(
    args: Iterable[str],
    *,
    cwd: Path,
    env: Mapping[str, str] | None = None,
    capture_output: bool = False,
) -> str:
    """Run a command, streaming its output unless ``capture_output`` is set.

    A non-zero exit raises :class:`subprocess.CalledProcessError`; a command
    that cannot be started raises :class:`CommandError`.
    """
    argv = list(args)
    _logger.debug("Running %s (cwd=%s)", " ".join(argv), cwd)
    try:
        completed = subprocess.run(
            argv,
            cwd=str(cwd),
            env=dict(env) if env is not None else None,
            check=True,
            text=True,
            capture_output=capture_output,
        )
    except FileNotFoundError as exc:
        raise CommandError(f"Could not run {argv[0]}: {exc.strerror or exc}") from exc
    if capture_output:
        return completed.stdout
    return ""


__all__ = ["CommandError", "Runner", "run_command"]

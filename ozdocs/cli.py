"""CLI entrypoint for oz-docs."""

from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path
from typing import Callable

from .config import load_config
from .driver import Previewer, prepare_preview
from .git.source import SourceError
from .logging import configure_logging, get_logger
from .playbook import PlaybookError
from .process import CommandError

COMMANDS = ("build", "watch")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oz-docs",
        description="Preview a documentation component with the OpenZeppelin docs site.",
    )
    parser.add_argument(
        "-c",
        "--component",
        default=".",
        help="Path to the documentation component (defaults to current directory).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="build",
        help="`build` (default) or `watch`.",
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        help="In watch mode, globs whose changes rerun `npm run prepare-docs`.",
    )
    return parser


def main(
    argv: list[str] | None = None,
    *,
    prepare: Callable[..., Previewer] = prepare_preview,
) -> int:
    """CLI entrypoint; returns the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    logger = get_logger("cli")

    if args.command not in COMMANDS:
        print(f"Unknown command {args.command}", file=sys.stderr)
        return 1

    try:
        previewer = prepare(args.component, config=load_config())
        if args.command == "build":
            previewer.build()
        else:
            previewer.watch(args.patterns)
    except subprocess.CalledProcessError as exc:
        command = exc.cmd if isinstance(exc.cmd, str) else " ".join(str(part) for part in exc.cmd)
        logger.error("Command failed with status %d: %s", exc.returncode, command)
        return exc.returncode
    except (CommandError, SourceError, PlaybookError) as exc:
        print(f"oz-docs: {exc}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()

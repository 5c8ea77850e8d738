"""Keeps the cached docs environment cloned and up to date."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from ..config import PreviewConfig, load_config
from ..logging import get_logger
from ..models import SyncResult
from ..process import Runner, run_command


class DocsSynchronizer:
    """Clones or pulls the docs repository and installs its dependencies."""

    def __init__(self, config: PreviewConfig | None = None, runner: Runner | None = None) -> None:
        self.config = config or load_config()
        self._runner = runner or run_command
        self.logger = get_logger("sync")

    def sync(self, docs_dir: Path, workdir: Path) -> SyncResult:
        """Make sure ``docs_dir`` holds a dependency-installed docs environment.

        ``workdir`` is the caller's project directory; a fresh clone gets its
        build output redirected into ``workdir/build``.
        """
        if docs_dir.exists():
            return self._update(docs_dir)
        return self._clone(docs_dir, workdir)

    def revision(self, docs_dir: Path) -> str:
        output = self._run(["git", "rev-parse", "HEAD"], cwd=docs_dir, capture_output=True)
        return output.strip()

    # ------------------------------------------------------------------
    # Internals

    def _update(self, docs_dir: Path) -> SyncResult:
        before = self.revision(docs_dir)
        self.logger.info("Updating docs environment in %s", docs_dir)
        self._run(["git", "pull"], cwd=docs_dir)
        after = self.revision(docs_dir)
        self.logger.debug("Docs revision %s -> %s", before, after)

        if before == after:
            return SyncResult(docs_dir=str(docs_dir), cloned=False, installed=False)

        self._install(docs_dir)
        return SyncResult(docs_dir=str(docs_dir), cloned=False, installed=True)

    def _clone(self, docs_dir: Path, workdir: Path) -> SyncResult:
        self.logger.info("Cloning %s (%s) into %s", self.config.repo_url, self.config.branch, docs_dir)
        self._run(
            [
                "git",
                "clone",
                self.config.repo_url,
                f"--branch={self.config.branch}",
                "--depth=1",
                str(docs_dir),
            ],
            cwd=workdir,
        )
        self._install(docs_dir)

        # Built pages land in the project directory rather than the cache.
        build_dir = (workdir / self.config.build_dirname).resolve()
        build_dir.mkdir(parents=True, exist_ok=True)
        os.symlink(build_dir, docs_dir / self.config.build_dirname, target_is_directory=True)
        self.logger.debug("Linked %s -> %s", docs_dir / self.config.build_dirname, build_dir)
        return SyncResult(docs_dir=str(docs_dir), cloned=True, installed=True)

    def _install(self, docs_dir: Path) -> None:
        self.logger.info("Installing docs dependencies")
        self._run(self.config.install_command, cwd=docs_dir)

    def _run(self, args: Iterable[str], *, cwd: Path, capture_output: bool = False) -> str:
        return self._runner(args, cwd=cwd, capture_output=capture_output)


__all__ = ["DocsSynchronizer"]

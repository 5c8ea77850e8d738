"""Build and watch drivers for a composed docs preview."""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

from .config import PreviewConfig, load_config
from .git.source import build_source
from .git.sync import DocsSynchronizer
from .logging import get_logger
from .playbook import compose_playbook
from .process import Runner, run_command
from .watch import WatchSession
from .workspace import docs_dir_for

DISABLE_PREPARE_ENV = "DISABLE_PREPARE_DOCS"


class Previewer:
    """Runs the docs generator against a composed local playbook."""

    def __init__(
        self,
        docs_dir: Path,
        playbook: Path,
        *,
        workdir: Path,
        component: Path,
        config: PreviewConfig | None = None,
        runner: Runner | None = None,
    ) -> None:
        self.docs_dir = docs_dir
        self.playbook = playbook
        self.workdir = workdir
        self.component = component
        self.config = config or load_config()
        self._runner = runner or run_command
        self._env: Optional[Dict[str, str]] = None
        self.logger = get_logger("driver")

    @property
    def env(self) -> Optional[Dict[str, str]]:
        return self._env

    def build(self) -> None:
        self.logger.info("Building docs with %s", self.playbook)
        self._runner(
            [*self.config.build_command, str(self.playbook)],
            cwd=self.docs_dir,
            env=self._env,
        )

    def prepare(self) -> None:
        self.logger.info("Preparing docs sources")
        self._runner(list(self.config.prepare_command), cwd=self.workdir, env=self._env)

    def watch(
        self,
        patterns: Sequence[str],
        *,
        session: WatchSession | None = None,
        block: bool = True,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> WatchSession:
        """Rebuild on changes until interrupted.

        Source preparation is run here on matching ``patterns`` instead of by
        the generator, and the build reruns on playbook or AsciiDoc changes in
        the component directory.
        """
        self._env = {**os.environ, DISABLE_PREPARE_ENV: "true"}
        session = session or WatchSession()
        delay = self.config.debounce_delay

        if patterns:
            session.add(
                self.workdir,
                patterns,
                self.prepare,
                delay=delay,
                name="prepare-docs",
                timer_factory=timer_factory,
            )
        else:
            self.logger.debug("No source patterns given; only watching %s", self.component)

        session.add(
            self.component,
            self.config.doc_patterns,
            self.build,
            delay=delay,
            name="build",
            timer_factory=timer_factory,
        )

        # Initial run, before any file has changed.
        session.trigger_all()

        if block:
            self.logger.info("Watching for changes (Ctrl+C to stop)")
            session.run_forever()
        return session


def prepare_preview(
    component: str | Path = ".",
    *,
    workdir: Path | None = None,
    config: PreviewConfig | None = None,
    runner: Runner | None = None,
) -> Previewer:
    """Synchronise the docs environment and compose the local playbook."""
    settings = config or load_config()
    cwd = (workdir or Path.cwd()).resolve()
    docs_dir = docs_dir_for(cwd, settings.cache_root)

    DocsSynchronizer(settings, runner=runner).sync(docs_dir, cwd)
    source = build_source(component, cwd=cwd)
    playbook = compose_playbook(docs_dir, source, settings)

    return Previewer(
        docs_dir,
        playbook,
        workdir=cwd,
        component=(cwd / Path(component)).resolve(),
        config=settings,
        runner=runner,
    )


__all__ = ["DISABLE_PREPARE_ENV", "Previewer", "prepare_preview"]

"""Runtime settings for oz-docs previews."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Tuple

DOCS_REPO_URL = "https://github.com/OpenZeppelin/docs.openzeppelin.com.git"
DOCS_BRANCH = "build-local"

ENV_CACHE_DIR = "OZ_DOCS_CACHE_DIR"
_CACHE_DIRNAME = "openzeppelin-docs-preview"


@dataclass(frozen=True)
class PreviewConfig:
    """Fixed locations and commands used to drive a docs preview."""

    cache_root: Path
    repo_url: str = DOCS_REPO_URL
    branch: str = DOCS_BRANCH
    playbook_name: str = "playbook.yml"
    local_playbook_name: str = "local-playbook.yml"
    build_dirname: str = "build"
    debounce_delay: float = 0.5
    install_command: Tuple[str, ...] = ("npx", "yarn")
    build_command: Tuple[str, ...] = ("npm", "run", "build:custom")
    prepare_command: Tuple[str, ...] = ("npm", "run", "prepare-docs")
    doc_patterns: Tuple[str, ...] = field(default=("**/*.yml", "**/*.adoc"))


def default_cache_root(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the directory that holds every cached docs environment."""
    env = os.environ if environ is None else environ
    override = env.get(ENV_CACHE_DIR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path(tempfile.gettempdir()) / _CACHE_DIRNAME


def load_config(environ: Optional[Mapping[str, str]] = None) -> PreviewConfig:
    """Build the preview settings, honouring the cache directory override."""
    return PreviewConfig(cache_root=default_cache_root(environ))


__all__ = ["DOCS_BRANCH", "DOCS_REPO_URL", "ENV_CACHE_DIR", "PreviewConfig", "default_cache_root", "load_config"]

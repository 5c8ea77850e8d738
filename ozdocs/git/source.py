"""Describes the current checkout as an Antora content source."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ..models import ContentSource


class SourceError(RuntimeError):
    """Raised when the previewed project is not inside a git repository."""


def find_repo_root(start: Path) -> Optional[Path]:
    """Return the nearest directory at or above ``start`` holding a ``.git`` directory."""
    current = start.resolve()
    for candidate in (current, *current.parents):
        if (candidate / ".git").is_dir():
            return candidate
    return None


def build_source(component: str | Path = ".", cwd: Path | None = None) -> ContentSource:
    """Build the content source for ``component`` within the enclosing repository."""
    base = (cwd or Path.cwd()).resolve()
    component_path = (base / Path(component)).resolve()
    repo_root = find_repo_root(component_path)
    if repo_root is None:
        raise SourceError("Must be inside a git repository")

    relative = os.path.relpath(component_path, repo_root)
    start_path = "" if relative == os.curdir else Path(relative).as_posix()
    return ContentSource(url=str(repo_root), start_path=start_path, branches="HEAD")


__all__ = ["SourceError", "build_source", "find_repo_root"]

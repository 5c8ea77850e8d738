"""Per-project location of the cached docs environment."""

from __future__ import annotations

import hashlib
from pathlib import Path

from .config import default_cache_root


def docs_dir_for(cwd: str | Path, cache_root: Path | None = None) -> Path:
    """Return the docs environment directory for a working directory.

    The directory name is the SHA-1 of the absolute working directory, so the
    same project always maps to the same clone. Nothing is created on disk.
    """
    absolute = str(Path(cwd).absolute())
    digest = hashlib.sha1(absolute.encode("utf-8")).hexdigest()
    root = cache_root if cache_root is not None else default_cache_root()
    return root / digest


__all__ = ["docs_dir_for"]

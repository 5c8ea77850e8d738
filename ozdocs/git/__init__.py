"""Git-backed helpers for the docs environment and the previewed project."""

from .source import SourceError, build_source, find_repo_root
from .sync import DocsSynchronizer

__all__ = ["DocsSynchronizer", "SourceError", "build_source", "find_repo_root"]

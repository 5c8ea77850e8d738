"""Data models shared across oz-docs components."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ContentSource:
    """Antora content source pointing at the current checkout."""

    url: str
    start_path: str
    branches: str = "HEAD"

    def to_dict(self) -> Dict[str, str]:
        return {
            "url": self.url,
            "start_path": self.start_path,
            "branches": self.branches,
        }


@dataclass(frozen=True)
class SyncResult:
    """Outcome of synchronising the docs environment."""

    docs_dir: str
    cloned: bool
    installed: bool

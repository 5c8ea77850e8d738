"""Derives a local Antora playbook that includes the current project."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from .config import PreviewConfig, load_config
from .logging import get_logger
from .models import ContentSource

_logger = get_logger("playbook")


class PlaybookError(RuntimeError):
    """Raised when the base playbook cannot be read or has no content sources."""


def load_playbook(path: Path) -> Dict[str, Any]:
    """Read a playbook mapping from disk."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise PlaybookError(f"Playbook not found at {path}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise PlaybookError(f"Failed to parse {path.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise PlaybookError(f"{path.name} must contain a mapping at the root")
    return data


def with_source(playbook: Dict[str, Any], source: ContentSource) -> Dict[str, Any]:
    """Return a copy of ``playbook`` whose sources are the primary one plus ``source``."""
    content = playbook.get("content")
    sources = content.get("sources") if isinstance(content, dict) else None
    if not isinstance(sources, list) or not sources:
        raise PlaybookError("Playbook has no content sources")

    updated_sources: List[Any] = [sources[0], source.to_dict()]
    updated = dict(playbook)
    updated["content"] = {**content, "sources": updated_sources}
    return updated


def compose_playbook(
    docs_dir: Path, source: ContentSource, config: PreviewConfig | None = None
) -> Path:
    """Write the local playbook for ``source`` and return its path.

    The checked-in playbook is only read; the derived file is rewritten on
    every call.
    """
    settings = config or load_config()
    base = load_playbook(docs_dir / settings.playbook_name)
    playbook = with_source(base, source)

    local_file = (docs_dir / settings.local_playbook_name).resolve()
    local_file.write_text(
        yaml.safe_dump(playbook, default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )
    _logger.info("Wrote local playbook %s", local_file)
    return local_file


__all__ = ["PlaybookError", "compose_playbook", "load_playbook", "with_source"]

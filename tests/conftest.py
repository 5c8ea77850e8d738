from __future__ import annotations

from pathlib import Path

import pytest

from ozdocs.config import PreviewConfig


@pytest.fixture
def config(tmp_path: Path) -> PreviewConfig:
    """Preview settings whose cache lives under the pytest tmp_path."""
    return PreviewConfig(cache_root=tmp_path / "cache")


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A git working tree with a docs component below its root."""
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    (root / "docs" / "modules" / "ROOT" / "pages").mkdir(parents=True)
    return root

"""Tests for the docs environment locator."""

from __future__ import annotations

import hashlib
from pathlib import Path

from ozdocs.workspace import docs_dir_for


def test_docs_dir_is_deterministic(tmp_path: Path) -> None:
    cache = tmp_path / "cache"
    first = docs_dir_for("/work/project", cache)
    second = docs_dir_for("/work/project", cache)

    assert first == second
    assert first.parent == cache


def test_docs_dir_uses_sha1_of_working_directory(tmp_path: Path) -> None:
    cache = tmp_path / "cache"
    expected = hashlib.sha1(str(Path("/work/project").absolute()).encode("utf-8")).hexdigest()

    assert docs_dir_for("/work/project", cache).name == expected
    assert len(expected) == 40


def test_docs_dir_differs_between_directories(tmp_path: Path) -> None:
    cache = tmp_path / "cache"
    paths = {docs_dir_for(f"/work/project-{index}", cache) for index in range(50)}

    assert len(paths) == 50


def test_docs_dir_has_no_side_effects(tmp_path: Path) -> None:
    cache = tmp_path / "cache"
    docs_dir_for(tmp_path, cache)

    assert not cache.exists()


def test_docs_dir_defaults_to_cache_override(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("OZ_DOCS_CACHE_DIR", str(tmp_path / "override"))

    assert docs_dir_for("/work/project").parent == tmp_path / "override"

from __future__ import annotations

"""
Unit tests for the Artifact Cleaning Service.

Verifies:
1. Recursive removal of artifacts and preservation of sources.
2. Idempotence of consecutive runs.
3. Dry-run reporting without side effects.
4. Propagation of filesystem errors.
"""

import logging
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from shadersync.core.services.cleaner import clean_artifacts


def _remaining(root: Path, suffix: str = ".spv"):
    return sorted(p.name for p in root.rglob(f"*{suffix}"))


def test_clean_removes_every_artifact(shader_tree: Path) -> None:
    """No file with the suffix remains anywhere under the root."""
    deleted = clean_artifacts(str(shader_tree), ".spv")

    assert _remaining(shader_tree) == []
    assert sorted(Path(p).name for p in deleted) == ["blur.comp.spv", "old.vert.spv"]

    # Sources survive
    assert (shader_tree / "a.vert").exists()
    assert (shader_tree / "post" / "blur.comp").exists()


def test_clean_is_idempotent(shader_tree: Path) -> None:
    """A second run without an intervening build deletes nothing."""
    clean_artifacts(str(shader_tree), ".spv")
    assert clean_artifacts(str(shader_tree), ".spv") == []


def test_clean_visits_files_before_subdirectories(shader_tree: Path) -> None:
    deleted = clean_artifacts(str(shader_tree), ".spv")
    assert [Path(p).name for p in deleted] == ["old.vert.spv", "blur.comp.spv"]


def test_clean_matches_suffix_only(tmp_path: Path) -> None:
    """Files merely containing the suffix text are kept."""
    (tmp_path / "shader.spv.vert").write_text("x", encoding="utf-8")
    (tmp_path / "shader.vert.spv").write_text("x", encoding="utf-8")

    clean_artifacts(str(tmp_path), ".spv")

    assert (tmp_path / "shader.spv.vert").exists()
    assert not (tmp_path / "shader.vert.spv").exists()


def test_clean_dry_run_keeps_files(shader_tree: Path) -> None:
    deleted = clean_artifacts(str(shader_tree), ".spv", dry_run=True)

    assert len(deleted) == 2
    assert _remaining(shader_tree) == ["blur.comp.spv", "old.vert.spv"]


def test_clean_empty_directory_is_silent(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG):
        assert clean_artifacts(str(tmp_path), ".spv") == []
    assert caplog.records == []


def test_clean_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        clean_artifacts(str(tmp_path / "missing"), ".spv")


def test_clean_deletion_failure_propagates(shader_tree: Path) -> None:
    """A locked artifact aborts the walk instead of being skipped."""
    with patch("shadersync.core.services.cleaner.os.remove", side_effect=PermissionError("locked")):
        with pytest.raises(PermissionError):
            clean_artifacts(str(shader_tree), ".spv")


@pytest.mark.skipif(sys.platform == "win32", reason="Symlinks require elevated privileges on Windows")
def test_clean_does_not_follow_links_out_of_root(tmp_path: Path) -> None:
    """Artifacts reachable only through a symlink are left untouched."""
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "keep.spv").write_text("x", encoding="utf-8")

    root = tmp_path / "shaders"
    root.mkdir()
    (root / "old.spv").write_text("x", encoding="utf-8")
    os.symlink(outside, root / "link")

    deleted = clean_artifacts(str(root), ".spv")

    assert [Path(p).name for p in deleted] == ["old.spv"]
    assert (outside / "keep.spv").exists()


@pytest.mark.skipif(sys.platform == "win32", reason="Symlinks require elevated privileges on Windows")
def test_clean_survives_symlink_cycle(shader_tree: Path) -> None:
    """A link back to the root does not turn the walk into a loop."""
    os.symlink(shader_tree, shader_tree / "loop")

    deleted = clean_artifacts(str(shader_tree), ".spv")

    assert sorted(Path(p).name for p in deleted) == ["blur.comp.spv", "old.vert.spv"]

from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, cross-platform data directory resolution
and the single-level directory listing.
"""

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from shadersync.infra.fs import (
    get_user_data_dir,
    list_directory,
    normalize_path,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert "ShaderSync" in path


def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.shadersync on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=mock_home):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                normalized_path = path.replace("\\", "/")
                assert normalized_path.endswith("/home/testuser/.shadersync")


def test_normalize_path_expansion() -> None:
    """TC-02: Verify expansion of environment variables and fallback."""
    with patch.dict(os.environ, {"TEST_VAR": "my_shaders"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.lower().endswith(os.path.join("my_shaders", "sub").lower())

    assert normalize_path("   ", fallback="fallback_dir") == os.path.abspath("fallback_dir")


# -----------------------------------------------------------------------------
# DIRECTORY LISTING TESTS
# -----------------------------------------------------------------------------

def test_list_directory_partitions_entries(shader_tree: Path) -> None:
    """TC-03: Files are returned by name, subdirectories by absolute path."""
    listing = list_directory(str(shader_tree))

    assert listing.files == ["a.vert", "b.frag", "old.vert.spv"]
    assert listing.subdirs == [os.path.abspath(shader_tree / "post")]


def test_list_directory_does_not_recurse(shader_tree: Path) -> None:
    listing = list_directory(str(shader_tree))
    assert "blur.comp" not in listing.files


def test_list_directory_empty(tmp_path: Path) -> None:
    listing = list_directory(str(tmp_path))
    assert listing.files == []
    assert listing.subdirs == []


def test_list_directory_missing_raises(tmp_path: Path) -> None:
    """TC-04: A missing directory is reported to the caller."""
    with pytest.raises(FileNotFoundError):
        list_directory(str(tmp_path / "missing"))


@pytest.mark.skipif(sys.platform == "win32", reason="Symlinks require elevated privileges on Windows")
def test_list_directory_skips_symlinks(tmp_path: Path) -> None:
    """TC-05: Links to files and directories are left out of the listing."""
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "keep.vert").write_text("x", encoding="utf-8")

    root = tmp_path / "shaders"
    root.mkdir()
    (root / "a.vert").write_text("x", encoding="utf-8")
    os.symlink(outside, root / "link")
    os.symlink(outside / "keep.vert", root / "linked.vert")
    os.symlink(root, root / "loop")

    listing = list_directory(str(root))

    assert listing.files == ["a.vert"]
    assert listing.subdirs == []

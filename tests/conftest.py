from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for shader trees, fake compilers and configuration dictionaries.
"""

import os
import stat
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# Stand-in for glslc: copies the source to the output, fails on '#error'
_FAKE_COMPILER_SOURCE = '''\
import sys

src, out = sys.argv[1], sys.argv[3]
with open(src, "r", encoding="utf-8") as f:
    text = f.read()
if "#error" in text:
    sys.stderr.write(src + ": error: forced failure\\n")
    sys.exit(1)
with open(out, "w", encoding="utf-8") as f:
    f.write("SPIRV:" + text)
'''


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def shader_tree(tmp_path: Path) -> Path:
    """
    Create a small shader tree with one stale artifact.

    Structure:
    /shaders
      a.vert
      b.frag
      old.vert.spv
      /post
        blur.comp
        blur.comp.spv
    """
    root = tmp_path / "shaders"
    root.mkdir()
    (root / "a.vert").write_text("void main() {}", encoding="utf-8")
    (root / "b.frag").write_text("void main() {}", encoding="utf-8")
    (root / "old.vert.spv").write_bytes(b"\x03\x02\x23\x07")

    post = root / "post"
    post.mkdir()
    (post / "blur.comp").write_text("void main() {}", encoding="utf-8")
    (post / "blur.comp.spv").write_bytes(b"\x03\x02\x23\x07")

    return root


@pytest.fixture
def fake_compiler(tmp_path: Path) -> Path:
    """Write an executable script behaving like a minimal shader compiler."""
    if sys.platform == "win32":
        pytest.skip("Shebang-based fake compiler requires a POSIX system.")

    impl = tmp_path / "fake_glslc.py"
    impl.write_text(_FAKE_COMPILER_SOURCE, encoding="utf-8")

    script = tmp_path / "fake_glslc"
    script.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{impl}" "$@"\n', encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def mock_config_dict(shader_tree: Path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        "shader_dir": str(shader_tree),
        "compiler": "glslc",
        "artifact_suffix": ".spv",
        "max_workers": 2,
        "clean_first": True,
    }

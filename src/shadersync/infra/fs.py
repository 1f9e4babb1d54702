from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path manipulation and the single-level directory
listing shared by the cleaning and building services. Acts as an abstraction
over the 'os' module to ensure uniform behavior across Windows and Unix-like systems.
"""

import os
from typing import Optional

from shadersync.domain.models import DirectoryListing

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "ShaderSync"
UNIX_APP_DIR_NAME = ".shadersync"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/ShaderSync
    - Linux/Mac: ~/.shadersync

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    # Windows specific resolution
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# DIRECTORY LISTING API
# -----------------------------------------------------------------------------

def list_directory(path: str) -> DirectoryListing:
    """
    Partition the immediate entries of a directory into files and subdirectories.

    Does not recurse. Entries are sorted by name so that traversals built on
    top of this listing visit siblings in a stable order. Symbolic links are
    not followed: a link to a file or a directory is left out of both lists,
    so walks stay inside the tree and cannot loop.

    Args:
        path: Directory to inspect.

    Returns:
        DirectoryListing: File names and absolute subdirectory paths.

    Raises:
        OSError: If the directory does not exist or cannot be read.
    """
    files = []
    subdirs = []

    with os.scandir(path) as entries:
        for entry in sorted(entries, key=lambda e: e.name):
            if entry.is_file(follow_symlinks=False):
                files.append(entry.name)
            elif entry.is_dir(follow_symlinks=False):
                subdirs.append(os.path.abspath(os.path.join(path, entry.name)))

    return DirectoryListing(files=files, subdirs=subdirs)

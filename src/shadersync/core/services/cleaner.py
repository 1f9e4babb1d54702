from __future__ import annotations

"""
Compiled Artifact Cleaning Service.

Removes every previously generated artifact below a shader root so that the
following build starts from sources only.
"""

import logging
import os
from typing import List

from shadersync.infra.fs import list_directory

logger = logging.getLogger(__name__)


def clean_artifacts(root: str, suffix: str, *, dry_run: bool = False) -> List[str]:
    """
    Recursively delete every file whose name ends with the artifact suffix.

    Visits the files of each directory before descending into its
    subdirectories. Deletion is synchronous and errors are not caught:
    an unreadable directory or a locked artifact aborts the whole walk.

    Args:
        root: Directory to clean.
        suffix: Artifact filename suffix (e.g. '.spv').
        dry_run: If True, only report what would be deleted.

    Returns:
        List[str]: Paths of the deleted (or deletable) artifacts.

    Raises:
        OSError: On directory read or deletion failure.
    """
    deleted: List[str] = []
    listing = list_directory(root)

    for name in listing.files:
        if not name.endswith(suffix):
            continue
        path = os.path.join(root, name)
        if dry_run:
            logger.debug(f"Would delete artifact: {path}")
        else:
            os.remove(path)
            logger.debug(f"Deleted artifact: {path}")
        deleted.append(path)

    for subdir in listing.subdirs:
        deleted.extend(clean_artifacts(subdir, suffix, dry_run=dry_run))

    return deleted

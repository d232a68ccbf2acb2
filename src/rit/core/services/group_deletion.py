"""Deletion of a formula directory and of the groups it leaves empty.

A formula invoked as ``rit docker build`` lives at ``<root>/docker/build``.
Deleting it removes ``build`` and then walks back up, removing every ancestor
group that no longer holds a sub-directory. The root itself is never removed.

Failures are not rolled back: levels already removed stay removed when a
shallower step raises.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Sequence

from rit.core.services.observability import log_debug


def is_prunable(path: Path) -> bool:
    """True when ``path`` holds no sub-directory.

    Entries are not followed: files and symlinks, including links to
    directories, never keep a group alive.
    """
    with os.scandir(path) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                return False
    return True


def delete_group(root_dir: str | Path, segments: Sequence[str]) -> None:
    """Remove ``root_dir/segments...`` and prune ancestors left without groups.

    Raises:
        OSError: on any listing or removal failure, including a leaf that
            does not exist (so deleting the same path twice fails).
    """
    _delete(Path(root_dir), segments, 0)


def _delete(current: Path, segments: Sequence[str], index: int) -> None:
    if index == len(segments):
        shutil.rmtree(current)
        log_debug("formula_dir_removed", details={"path": str(current)})
        return

    _delete(current / segments[index], segments, index + 1)
    if index == 0:
        return

    if is_prunable(current):
        shutil.rmtree(current)
        log_debug("group_dir_pruned", details={"path": str(current)})

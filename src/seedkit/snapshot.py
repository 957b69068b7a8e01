"""Before/after listings of a project tree for reporting created files."""

from __future__ import annotations

import os
from pathlib import Path

from .exceptions import PathError


def snapshot_files(root: Path) -> set[str]:
    """Return every file under *root* as a slash-separated relative path.

    A missing root yields an empty set.
    """
    root = Path(root)
    if not root.exists():
        return set()
    if not root.is_dir():
        msg = f"{root} is not a directory"
        raise PathError(msg, details={"path": str(root), "operation": "snapshot"})

    files: set[str] = set()
    for dirpath, _dirnames, filenames in os.walk(root):
        for filename in filenames:
            files.add((Path(dirpath) / filename).relative_to(root).as_posix())
    return files


def created_files(before: set[str], after: set[str]) -> list[str]:
    """Sorted paths present in *after* but not in *before*."""
    return sorted(after - before)

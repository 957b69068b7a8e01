"""Target directory validation before any file is written."""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import PathError, StateError, WriteError

logger = logging.getLogger(__name__)

DIRECTORY_MODE = 0o755


def prepare_directory(target: Path, allow_non_empty: bool = False) -> bool:
    """Ensure *target* is ready for scaffolding.

    - Missing target: the parent must already exist; only the target itself
      is created.
    - Existing target: must be a directory, and must be empty unless
      *allow_non_empty* is set. Existing entries are never touched.

    Args:
        target: Directory to scaffold into
        allow_non_empty: Accept a directory that already has entries

    Returns:
        True if the directory was created, False if an existing one is reused

    Raises:
        PathError: Parent missing, target is a file, or target unreadable
        StateError: Target has entries and *allow_non_empty* is False
        WriteError: Target could not be created
    """
    target = Path(target)
    details = {"path": str(target), "operation": "prepare"}

    if not target.exists() and not target.is_symlink():
        parent = target.parent
        if not parent.exists():
            msg = f"parent directory {parent} does not exist, please create it first"
            raise PathError(msg, details=details)
        if not parent.is_dir():
            msg = f"parent path {parent} is not a directory"
            raise PathError(msg, details=details)
        try:
            target.mkdir(mode=DIRECTORY_MODE)
        except PermissionError as e:
            msg = f"permission denied creating directory {target}: {e}"
            raise PathError(msg, details=details) from e
        except OSError as e:
            msg = f"failed to create directory {target}: {e}"
            raise WriteError(msg, details=details) from e
        logger.info("Created directory %s", target)
        return True

    if not target.is_dir():
        msg = f"{target} exists but is not a directory"
        raise PathError(msg, details=details)

    try:
        entries = list(target.iterdir())
    except OSError as e:
        msg = f"failed to read directory {target}: {e}"
        raise PathError(msg, details=details) from e

    if entries and not allow_non_empty:
        msg = f"directory {target} is not empty (contains {len(entries)} items)"
        raise StateError(msg, details={**details, "entries": len(entries)})

    logger.debug("Reusing directory %s with %d entries", target, len(entries))
    return False

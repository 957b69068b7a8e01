"""Installs bundled skill documents into a project."""

from __future__ import annotations

import logging
from pathlib import Path

from .assets import AssetRegistry, default_registry
from .exceptions import PathError, WriteError
from .models import SkillsInstallReport
from .scaffold import FILE_MODE, ensure_subdirectory

logger = logging.getLogger(__name__)

SKILLS_DIR = "skills"


def install_skills(
    target_dir: Path,
    registry: AssetRegistry | None = None,
) -> SkillsInstallReport:
    """Copy every skill document into ``target_dir/skills/``.

    Files that already exist are left alone and reported as skipped, so
    re-running never clobbers user edits.

    Args:
        target_dir: Existing project directory
        registry: Asset registry, defaults to the bundled assets

    Returns:
        Report with sorted installed and skipped names

    Raises:
        PathError: *target_dir* is missing or not a directory
        WriteError: A skill file could not be written
    """
    registry = registry or default_registry()
    target_dir = Path(target_dir)

    if not target_dir.exists():
        msg = f"target directory {target_dir} does not exist"
        raise PathError(msg, details={"path": str(target_dir), "operation": "install"})
    if not target_dir.is_dir():
        msg = f"{target_dir} is not a directory"
        raise PathError(msg, details={"path": str(target_dir), "operation": "install"})

    skills_dir = ensure_subdirectory(target_dir / SKILLS_DIR)
    report = SkillsInstallReport()

    for name, content in registry.documents.items():
        output_path = skills_dir / name
        if output_path.exists() or output_path.is_symlink():
            report.skipped.append(name)
            logger.debug("Skipping existing skill %s", output_path)
            continue
        try:
            output_path.write_bytes(content)
            output_path.chmod(FILE_MODE)
        except OSError as e:
            msg = f"failed to write {output_path}: {e}"
            raise WriteError(
                msg,
                details={"path": str(output_path), "operation": "install"},
            ) from e
        report.installed.append(name)

    report.installed.sort()
    report.skipped.sort()
    logger.info(
        "Installed %d skills into %s (%d preserved)",
        len(report.installed),
        skills_dir,
        len(report.skipped),
    )
    return report

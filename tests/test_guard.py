"""Tests for target directory preparation."""

import stat
from pathlib import Path

import pytest

from seedkit.exceptions import PathError, StateError
from seedkit.guard import prepare_directory


class TestPrepareDirectory:
    """Test prepare_directory rules."""

    def test_creates_missing_directory(self, tmp_path: Path) -> None:
        """Test that a missing target is created under an existing parent."""
        target = tmp_path / "project"
        assert prepare_directory(target) is True
        assert target.is_dir()
        assert stat.S_IMODE(target.stat().st_mode) & 0o700 == 0o700

    def test_missing_parent_fails(self, tmp_path: Path) -> None:
        """Test that only the target itself is ever created."""
        target = tmp_path / "nonexistent" / "project"
        with pytest.raises(PathError, match="parent directory"):
            prepare_directory(target)
        assert not (tmp_path / "nonexistent").exists()

    def test_parent_is_file_fails(self, tmp_path: Path) -> None:
        """Test that a file cannot serve as the parent."""
        parent = tmp_path / "file"
        parent.write_text("x")
        with pytest.raises(PathError, match="not a directory"):
            prepare_directory(parent / "project")

    def test_target_is_file_fails(self, tmp_path: Path) -> None:
        """Test that an existing regular file is rejected."""
        target = tmp_path / "not-a-dir"
        target.write_text("I'm a file")
        with pytest.raises(PathError, match="not a directory") as exc_info:
            prepare_directory(target)
        assert exc_info.value.details["path"] == str(target)
        assert target.read_text() == "I'm a file"

    def test_empty_directory_reused(self, tmp_path: Path) -> None:
        """Test that an empty existing directory is accepted."""
        target = tmp_path / "project"
        target.mkdir()
        assert prepare_directory(target) is False

    def test_non_empty_directory_fails(self, tmp_path: Path) -> None:
        """Test that existing entries block scaffolding without override."""
        target = tmp_path / "project"
        target.mkdir()
        (target / "existing.txt").write_text("hello")
        with pytest.raises(StateError, match="not empty") as exc_info:
            prepare_directory(target)
        assert "1 items" in str(exc_info.value)

    def test_non_empty_directory_allowed(self, tmp_path: Path) -> None:
        """Test that the override leaves existing entries untouched."""
        target = tmp_path / "project"
        target.mkdir()
        existing = target / "existing.txt"
        existing.write_text("hello")
        assert prepare_directory(target, allow_non_empty=True) is False
        assert existing.read_text() == "hello"
        assert [p.name for p in target.iterdir()] == ["existing.txt"]

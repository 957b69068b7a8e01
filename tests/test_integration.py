"""End-to-end tests for the scaffold then install-skills workflow."""

import json
from pathlib import Path

import pytest

from seedkit import DEFAULT_AI_TOOLS, ProjectConfig, Scaffolder, install_skills
from seedkit.exceptions import StateError
from seedkit.snapshot import created_files, snapshot_files

CORE_FILES = [
    ".editorconfig",
    ".gitignore",
    "AGENTS.md",
    "DECISIONS.md",
    "LEARNINGS.md",
    "README.md",
    "TODO.md",
]


class TestSeedKitIntegration:
    """Test the complete workflow as the CLI drives it."""

    @pytest.fixture
    def target(self, tmp_path: Path) -> Path:
        """An empty, pre-created project directory."""
        path = tmp_path / "demo"
        path.mkdir()
        return path

    def run(self, target: Path, allow_non_empty: bool = False, **answers) -> list[str]:
        """Scaffold and install skills, returning the created files."""
        answers.setdefault("project_name", "demo")
        answers.setdefault("description", "x")
        before = snapshot_files(target)
        Scaffolder().scaffold(target, ProjectConfig(**answers), allow_non_empty)
        install_skills(target)
        return created_files(before, snapshot_files(target))

    def test_docs_only_project(self, target: Path) -> None:
        """Test the plain documentation scaffold."""
        created = self.run(target, license="none")
        assert [f for f in created if not f.startswith("skills/")] == CORE_FILES
        assert any(f.startswith("skills/") for f in created)

    def test_devcontainer_project(self, target: Path) -> None:
        """Test a dev container without chat continuity."""
        created = self.run(
            target,
            include_devcontainer=True,
            devcontainer_image="tagA",
            ai_chat_continuity=False,
        )
        assert ".devcontainer/Dockerfile" in created
        assert ".devcontainer/setup.sh" not in created
        dc = json.loads((target / ".devcontainer" / "devcontainer.json").read_text())
        assert dc["build"]["dockerfile"] == "Dockerfile"
        assert len(dc["mounts"]) == 1

    def test_chat_continuity_project(self, target: Path) -> None:
        """Test a dev container with chat continuity."""
        created = self.run(
            target,
            include_devcontainer=True,
            devcontainer_image="tagA",
            ai_chat_continuity=True,
        )
        assert ".devcontainer/setup.sh" in created
        dc = json.loads((target / ".devcontainer" / "devcontainer.json").read_text())
        assert len(dc["mounts"]) == 1 + len(DEFAULT_AI_TOOLS)
        assert "setup.sh" in dc["postCreateCommand"]

    def test_extensions_project(self, target: Path) -> None:
        """Test that extensions flow to both JSON files in order."""
        self.run(target, include_devcontainer=True, vscode_extensions=["a.b", "c.d"])
        dc = json.loads((target / ".devcontainer" / "devcontainer.json").read_text())
        manifest = json.loads((target / ".vscode" / "extensions.json").read_text())
        assert dc["customizations"]["vscode"]["extensions"] == ["a.b", "c.d"]
        assert manifest["recommendations"] == ["a.b", "c.d"]

    def test_existing_directory_with_override(self, target: Path) -> None:
        """Test scaffolding next to an unrelated file."""
        (target / "notes.txt").write_text("keep me")
        with pytest.raises(StateError):
            self.run(target)

        created = self.run(target, allow_non_empty=True)
        assert (target / "notes.txt").read_text() == "keep me"
        assert "notes.txt" not in created
        assert set(CORE_FILES) <= set(created)

    def test_rerun_preserves_edited_skills(self, target: Path) -> None:
        """Test that a retry with the override keeps edited skill files."""
        self.run(target)
        edited = target / "skills" / "doc-health-check.md"
        edited.write_text("my version")

        report = install_skills(target)
        assert "doc-health-check.md" in report.skipped
        assert report.installed == []
        assert edited.read_text() == "my version"

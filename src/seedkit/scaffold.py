"""Project scaffolding: turns a ProjectConfig into files on disk."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from .assets import AssetRegistry, default_registry
from .exceptions import SerializationError, WriteError
from .guard import DIRECTORY_MODE, prepare_directory
from .models import (
    DEFAULT_AI_TOOLS,
    EXTENSIONS_CACHE_DIR,
    GITHUB_CLI_FEATURE,
    SETUP_SCRIPT_COMMAND,
    AIToolEntry,
    DevContainer,
    DevContainerCustomizations,
    ExtensionsManifest,
    License,
    ProjectConfig,
    ScaffoldReport,
    VSCodeCustomizations,
    volume_slug,
)
from .renderer import TemplateRenderer
from .setup_script import extensions_symlink_command, generate_setup_script, post_create_command

logger = logging.getLogger(__name__)

CORE_TEMPLATES: tuple[str, ...] = (
    "README.md.tmpl",
    "AGENTS.md.tmpl",
    "DECISIONS.md.tmpl",
    "TODO.md.tmpl",
    "LEARNINGS.md.tmpl",
    ".gitignore.tmpl",
    ".editorconfig.tmpl",
)

LICENSE_TEMPLATES: dict[License, str] = {
    License.MIT: "LICENSE-MIT.tmpl",
    License.APACHE: "LICENSE-Apache.tmpl",
}

DEVCONTAINER_DIR = ".devcontainer"
VSCODE_DIR = ".vscode"
FILE_MODE = 0o644
SCRIPT_MODE = 0o755

TOKEN_ENV_FORWARDS: dict[str, str] = {
    "GH_TOKEN": "${localEnv:GH_TOKEN}",
    "GITHUB_TOKEN": "${localEnv:GITHUB_TOKEN}",
}


def build_devcontainer(
    config: ProjectConfig,
    tools: Sequence[AIToolEntry] = DEFAULT_AI_TOOLS,
) -> DevContainer:
    """Construct the devcontainer.json value for *config*.

    The extensions cache volume is always the first mount; AI tool bind
    mounts follow in registry order when chat continuity is enabled.
    """
    extensions_volume = f"{volume_slug(config.project_name)}-vscode-extensions"
    mounts = [
        f"source={extensions_volume},target={EXTENSIONS_CACHE_DIR},type=volume",
    ]
    container_env = dict(TOKEN_ENV_FORWARDS)

    if config.ai_chat_continuity:
        mounts.extend(
            f"source=${{localEnv:HOME}}/{tool.state_dir},"
            f"target=/home/vscode/{tool.state_dir},type=bind,consistency=cached"
            for tool in tools
        )
        container_env["HOST_WORKSPACE"] = "${localWorkspaceFolder}"
        command = SETUP_SCRIPT_COMMAND
    else:
        command = post_create_command()

    customizations = None
    if config.vscode_extensions:
        customizations = DevContainerCustomizations(
            vscode=VSCodeCustomizations(extensions=list(config.vscode_extensions)),
        )

    return DevContainer(
        name=f"{config.project_name} (Dev Container)",
        features={GITHUB_CLI_FEATURE: {}},
        customizations=customizations,
        mounts=mounts,
        container_env=container_env,
        post_create_command=command,
    )


def to_json(document: dict[str, Any], what: str) -> str:
    """Encode *document* with 2-space indentation and a trailing newline."""
    try:
        return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as e:
        msg = f"failed to generate {what}: {e}"
        raise SerializationError(msg, details={"artifact": what}) from e


def serialize_devcontainer(devcontainer: DevContainer) -> str:
    """Encode a DevContainer as devcontainer.json text."""
    try:
        document = devcontainer.to_document()
    except ValueError as e:
        msg = f"failed to generate devcontainer.json: {e}"
        raise SerializationError(msg, details={"artifact": "devcontainer.json"}) from e
    return to_json(document, "devcontainer.json")


def write_file(path: Path, content: str, mode: int = FILE_MODE) -> Path:
    """Write *content* to *path* and set its permissions."""
    try:
        path.write_text(content, encoding="utf-8", newline="\n")
        path.chmod(mode)
    except OSError as e:
        msg = f"failed to write {path}: {e}"
        raise WriteError(msg, details={"path": str(path), "operation": "write"}) from e
    logger.debug("Wrote %s", path)
    return path


def ensure_subdirectory(path: Path) -> Path:
    """Create *path* (and parents) if missing."""
    try:
        path.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
    except OSError as e:
        msg = f"failed to create {path.name} directory: {e}"
        raise WriteError(msg, details={"path": str(path), "operation": "mkdir"}) from e
    return path


class Scaffolder:
    """Renders a new project tree from bundled templates.

    Outputs that already exist in the target are never overwritten; they
    are reported as skipped instead.
    """

    def __init__(
        self,
        registry: AssetRegistry | None = None,
        tools: Sequence[AIToolEntry] = DEFAULT_AI_TOOLS,
    ) -> None:
        """Initialize scaffolder.

        Args:
            registry: Asset registry, defaults to the bundled assets
            tools: AI tools wired up when chat continuity is enabled
        """
        self.registry = registry or default_registry()
        self.renderer = TemplateRenderer(self.registry)
        self.tools = tuple(tools)

    def scaffold(
        self,
        target: Path,
        config: ProjectConfig,
        allow_non_empty: bool = False,
    ) -> ScaffoldReport:
        """Generate project files in *target*.

        Args:
            target: Directory to create the project in
            config: Validated project answers
            allow_non_empty: Accept an existing directory with entries

        Returns:
            Report with the relative paths written, in write order, and
            those kept because they already existed

        Raises:
            SeedKitError: Any failure; files written before it are kept
        """
        target = Path(target)
        prepare_directory(target, allow_non_empty)

        if config.year is None:
            config = config.model_copy(update={"year": datetime.now().year})
        data = config.template_data()

        report = ScaffoldReport()
        for template_name in CORE_TEMPLATES:
            self._render(target, target, template_name, data, report)

        template_name = LICENSE_TEMPLATES.get(config.license)
        if template_name is not None:
            self._render(target, target, template_name, data, report, output_name="LICENSE")

        if config.include_devcontainer:
            self._scaffold_devcontainer(target, config, data, report)

        logger.info(
            "Scaffolded %d files into %s (%d kept)",
            len(report.written),
            target,
            len(report.skipped),
        )
        return report

    def _claim(self, target: Path, path: Path, report: ScaffoldReport) -> bool:
        """Return True if *path* is free to write, else record it as skipped."""
        relative = path.relative_to(target).as_posix()
        if path.exists() or path.is_symlink():
            logger.debug("Keeping existing %s", path)
            report.skipped.append(relative)
            return False
        report.written.append(relative)
        return True

    def _render(
        self,
        target: Path,
        dest_dir: Path,
        template_name: str,
        data: dict[str, Any],
        report: ScaffoldReport,
        output_name: str | None = None,
    ) -> None:
        path = self.renderer.output_path(dest_dir, template_name, output_name)
        if self._claim(target, path, report):
            self.renderer.render(dest_dir, template_name, data, output_name)

    def _write(
        self,
        target: Path,
        path: Path,
        content: str,
        report: ScaffoldReport,
        mode: int = FILE_MODE,
    ) -> None:
        if self._claim(target, path, report):
            write_file(path, content, mode)

    def _scaffold_devcontainer(
        self,
        target: Path,
        config: ProjectConfig,
        data: dict[str, Any],
        report: ScaffoldReport,
    ) -> None:
        """Write .devcontainer/ and, with extensions selected, .vscode/extensions.json."""
        dc_dir = ensure_subdirectory(target / DEVCONTAINER_DIR)
        self._render(target, dc_dir, "Dockerfile.tmpl", data, report)

        if config.ai_chat_continuity:
            script = generate_setup_script(extensions_symlink_command(), self.tools)
            self._write(target, dc_dir / "setup.sh", script, report, SCRIPT_MODE)

        devcontainer = build_devcontainer(config, self.tools)
        self._write(
            target,
            dc_dir / "devcontainer.json",
            serialize_devcontainer(devcontainer),
            report,
        )

        if config.vscode_extensions:
            manifest = ExtensionsManifest(recommendations=list(config.vscode_extensions))
            vscode_dir = ensure_subdirectory(target / VSCODE_DIR)
            self._write(
                target,
                vscode_dir / "extensions.json",
                to_json(manifest.model_dump(), "extensions.json"),
                report,
            )

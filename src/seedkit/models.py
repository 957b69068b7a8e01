"""Core data models for SeedKit project scaffolding."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500

GITHUB_CLI_FEATURE = "ghcr.io/devcontainers/features/github-cli:1"
CONTAINER_HOME = "/home/vscode"
EXTENSIONS_CACHE_DIR = f"{CONTAINER_HOME}/.vscode-extensions-cache"
EXTENSIONS_DIR = f"{CONTAINER_HOME}/.vscode-server/extensions"
SETUP_SCRIPT_COMMAND = "bash .devcontainer/setup.sh"

# Image tags reference MCR defaults at time of release.
IMAGE_CHOICES: dict[str, str] = {
    "Go": "go:2-1.25-trixie",
    "Node/TypeScript": "typescript-node:20-bookworm",
    "Python": "python:3-3.12",
    "Rust": "rust:1-bookworm",
    "Java": "java",
    ".NET": "dotnet",
    "C++": "cpp",
    "Universal (all languages)": "universal",
}

EXTENSION_CHOICES: dict[str, str] = {
    "Claude Code": "anthropics.claude-code",
    "Codex": "openai.chatgpt",
}


class License(str, Enum):
    """License selector for the generated LICENSE file."""

    NONE = "none"
    MIT = "MIT"
    APACHE = "Apache-2.0"


class AIToolEntry(BaseModel):
    """An AI coding tool whose state directory can be shared with a container."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Human-readable tool name")
    state_dir: str = Field(..., description="Directory under $HOME, e.g. .claude")


DEFAULT_AI_TOOLS: tuple[AIToolEntry, ...] = (
    AIToolEntry(label="Claude Code", state_dir=".claude"),
    AIToolEntry(label="Codex", state_dir=".codex"),
)


class ProjectConfig(BaseModel):
    """Answers that drive a single scaffold run."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Project display name")
    description: str = Field(..., description="One or two sentence summary")
    license: License = Field(default=License.NONE, description="License selector")
    include_devcontainer: bool = Field(
        default=False,
        description="Whether to scaffold .devcontainer/",
    )
    devcontainer_image: str = Field(
        default=IMAGE_CHOICES["Go"],
        description="MCR devcontainer image tag",
    )
    ai_chat_continuity: bool = Field(
        default=False,
        description="Share AI tool state directories with the container",
    )
    vscode_extensions: list[str] = Field(
        default_factory=list,
        description="VS Code extension identifiers, in install order",
    )
    year: int | None = Field(
        default=None,
        description="Copyright year; the current year is used when unset",
    )

    @field_validator("project_name")
    @classmethod
    def validate_project_name(cls, v: str) -> str:
        """Trim and bound the project name."""
        v = v.strip()
        if not v:
            msg = "project name is required"
            raise ValueError(msg)
        if len(v) > MAX_NAME_LENGTH:
            msg = f"project name is too long (max {MAX_NAME_LENGTH} characters)"
            raise ValueError(msg)
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        """Trim and bound the description."""
        v = v.strip()
        if not v:
            msg = "description is required"
            raise ValueError(msg)
        if len(v) > MAX_DESCRIPTION_LENGTH:
            msg = f"description is too long (max {MAX_DESCRIPTION_LENGTH} characters)"
            raise ValueError(msg)
        return v

    @field_validator("license", mode="before")
    @classmethod
    def empty_license_is_none(cls, v: Any) -> Any:
        """Treat an unset license as no license."""
        if v is None or v == "":
            return License.NONE
        return v

    def template_data(self) -> dict[str, Any]:
        """Variables exposed to templates."""
        return self.model_dump(mode="json")


def volume_slug(project_name: str) -> str:
    """Convert a project name into a docker-safe volume name prefix."""
    slug = re.sub(r"[^a-z0-9_.-]+", "-", project_name.lower().strip())
    return slug.strip("-.") or "project"


class DevContainerBuild(BaseModel):
    """The "build" field in devcontainer.json."""

    dockerfile: str = "Dockerfile"


class VSCodeCustomizations(BaseModel):
    """VS Code specific customizations."""

    extensions: list[str] = Field(default_factory=list)


class DevContainerCustomizations(BaseModel):
    """Editor customizations block."""

    vscode: VSCodeCustomizations


class DevContainer(BaseModel):
    """A devcontainer.json document.

    Built as a typed value and serialized with json so optional fields never
    produce invalid output.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    build: DevContainerBuild = Field(default_factory=DevContainerBuild)
    features: dict[str, dict[str, Any]] = Field(default_factory=dict)
    customizations: DevContainerCustomizations | None = None
    mounts: list[str] = Field(default_factory=list)
    container_env: dict[str, str] = Field(default_factory=dict, alias="containerEnv")
    post_create_command: str = Field(default="", alias="postCreateCommand")

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-ready mapping, omitting unset optional blocks."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ExtensionsManifest(BaseModel):
    """A .vscode/extensions.json document."""

    recommendations: list[str] = Field(default_factory=list)


class SkillsInstallReport(BaseModel):
    """Outcome of copying skill documents into a project."""

    installed: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)


class ScaffoldReport(BaseModel):
    """Outcome of scaffolding a project tree.

    ``written`` is in write order. ``skipped`` lists outputs that already
    existed in a reused directory and were left untouched.
    """

    written: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)

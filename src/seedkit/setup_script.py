"""Builds .devcontainer/setup.sh for AI chat continuity."""

from __future__ import annotations

from collections.abc import Sequence

from .models import (
    CONTAINER_HOME,
    DEFAULT_AI_TOOLS,
    EXTENSIONS_CACHE_DIR,
    EXTENSIONS_DIR,
    AIToolEntry,
)

EXTENSIONS_STATE_FILE = f"{EXTENSIONS_CACHE_DIR}/extensions.json"


def extensions_symlink_command() -> str:
    """Point the VS Code server extensions dir at the cache volume."""
    return (
        f"mkdir -p {EXTENSIONS_CACHE_DIR} {CONTAINER_HOME}/.vscode-server "
        f"&& ln -sfn {EXTENSIONS_CACHE_DIR} {EXTENSIONS_DIR}"
    )


def extensions_state_guard() -> str:
    """Create an empty extensions.json on a fresh cache volume, never overwrite."""
    return f"[ -f {EXTENSIONS_STATE_FILE} ] || echo '[]' > {EXTENSIONS_STATE_FILE}"


def post_create_command() -> str:
    """postCreateCommand used when no setup script is generated."""
    return f"{extensions_symlink_command()} && {extensions_state_guard()}"


def generate_setup_script(
    symlink_command: str,
    tools: Sequence[AIToolEntry] = DEFAULT_AI_TOOLS,
) -> str:
    """Build a bash script that is safe to run on every container creation.

    Host and container workspace paths are turned into dash-separated keys,
    the layout AI tools use for per-project state, e.g.
    ``/home/user/projects/myapp`` -> ``-home-user-projects-myapp``. Each tool
    block only runs if that tool's state directory is mounted.

    Args:
        symlink_command: Command linking the extensions cache into place
        tools: AI tools to wire up, in order

    Returns:
        Script text
    """
    lines = [
        "#!/bin/bash",
        "# AI chat continuity setup, created by seed",
        "# Auto-detects AI coding tools and symlinks host project state",
        "# into the container workspace path so conversations persist.",
        "#",
        "# HOST_WORKSPACE is set via containerEnv in devcontainer.json",
        "# and resolved from ${localWorkspaceFolder} at container creation time.",
        "",
        "# VS Code extensions cache",
        symlink_command,
        extensions_state_guard(),
        "",
        "HOST_KEY=$(echo \"$HOST_WORKSPACE\" | tr '/' '-')",
        "CONTAINER_KEY=$(pwd | tr '/' '-')",
        "",
    ]

    for tool in tools:
        projects = f"$HOME/{tool.state_dir}/projects"
        lines.extend([
            f"# {tool.label} (auto-detected)",
            f'if [ -d "$HOME/{tool.state_dir}" ]; then',
            f'  mkdir -p "{projects}/$HOST_KEY"',
            f'  ln -sfn "{projects}/$HOST_KEY" "{projects}/$CONTAINER_KEY"',
            "fi",
            "",
        ])

    return "\n".join(lines)

"""Tests for setup.sh generation."""

from seedkit.models import DEFAULT_AI_TOOLS, AIToolEntry
from seedkit.setup_script import (
    extensions_symlink_command,
    generate_setup_script,
    post_create_command,
)

SYMLINK = "ln -sfn /home/vscode/.vscode-extensions-cache /home/vscode/.vscode-server/extensions"


class TestSetupScript:
    """Test the chat continuity setup script."""

    def test_shebang_first(self) -> None:
        """Test that the script starts with a bash shebang."""
        assert generate_setup_script(SYMLINK).startswith("#!/bin/bash\n")

    def test_symlink_and_state_guard(self) -> None:
        """Test that the cache is linked and extensions.json seeded only if absent."""
        script = generate_setup_script(SYMLINK)
        assert SYMLINK in script
        guard = (
            "[ -f /home/vscode/.vscode-extensions-cache/extensions.json ] "
            "|| echo '[]' > /home/vscode/.vscode-extensions-cache/extensions.json"
        )
        assert guard in script
        assert script.index(SYMLINK) < script.index(guard)

    def test_derives_keys(self) -> None:
        """Test that host and container keys replace slashes with dashes."""
        script = generate_setup_script(SYMLINK)
        assert "HOST_KEY=$(echo \"$HOST_WORKSPACE\" | tr '/' '-')" in script
        assert "CONTAINER_KEY=$(pwd | tr '/' '-')" in script

    def test_guarded_block_per_tool(self) -> None:
        """Test that each tool block only runs when its state dir exists."""
        script = generate_setup_script(SYMLINK)
        for tool in DEFAULT_AI_TOOLS:
            assert f'if [ -d "$HOME/{tool.state_dir}" ]; then' in script
            assert f'mkdir -p "$HOME/{tool.state_dir}/projects/$HOST_KEY"' in script
            assert (
                f'ln -sfn "$HOME/{tool.state_dir}/projects/$HOST_KEY" '
                f'"$HOME/{tool.state_dir}/projects/$CONTAINER_KEY"'
            ) in script

    def test_injected_registry(self) -> None:
        """Test that a substituted tool table is honoured, in order."""
        tools = (
            AIToolEntry(label="Zeta", state_dir=".zeta"),
            AIToolEntry(label="Alpha", state_dir=".alpha"),
        )
        script = generate_setup_script(SYMLINK, tools)
        assert script.count("if [ -d ") == 2
        assert script.index(".zeta") < script.index(".alpha")
        assert ".claude" not in script

    def test_empty_registry(self) -> None:
        """Test that no tool blocks are emitted for an empty table."""
        script = generate_setup_script(SYMLINK, ())
        assert "if [ -d " not in script
        assert "CONTAINER_KEY=" in script

    def test_post_create_command(self) -> None:
        """Test the command used when no setup script is generated."""
        command = post_create_command()
        assert command.startswith(extensions_symlink_command())
        assert "ln -sfn" in command
        assert ".vscode-extensions-cache" in command
        assert "extensions.json" in command

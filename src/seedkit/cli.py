"""SeedKit command-line interface."""

from __future__ import annotations

import logging
import subprocess
import sys
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path

import click
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .answers import load_answers
from .exceptions import SeedKitError
from .models import EXTENSION_CHOICES, IMAGE_CHOICES, License, ProjectConfig
from .scaffold import Scaffolder
from .skills import install_skills
from .snapshot import created_files, snapshot_files

app = typer.Typer(
    name="seed",
    help="Seed: simple project scaffolding for agentic development",
    add_completion=False,
)
console = Console()


def _get_version_string() -> str:
    """Installed distribution version, else the package's own."""
    try:
        return get_version("seedkit")
    except PackageNotFoundError:
        return __version__


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Callback for --version flag."""
    if value:
        console.print(f"seed version {_get_version_string()}")
        raise typer.Exit


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log every file operation",
    ),
) -> None:
    """Seed: simple project scaffolding for agentic development."""
    _configure_logging(verbose)


def _prompt_config(
    default_name: str,
    name: str | None,
    description: str | None,
    license_: License | None,
    devcontainer: bool | None,
    image: str | None,
    chat_continuity: bool | None,
    extensions: list[str] | None,
) -> ProjectConfig:
    """Fill in missing answers interactively."""
    if name is None:
        name = typer.prompt("Project name", default=default_name)
    if description is None:
        description = typer.prompt("Description")
    if devcontainer is None:
        devcontainer = typer.confirm("Include a dev container?", default=False)

    if devcontainer:
        if image is None:
            stacks = ", ".join(f"{label} ({tag})" for label, tag in IMAGE_CHOICES.items())
            console.print(f"Tech stacks: {stacks}")
            image = typer.prompt("Dev container image", default=IMAGE_CHOICES["Go"])
        if chat_continuity is None:
            chat_continuity = typer.confirm("Enable AI chat continuity?", default=False)
        if extensions is None:
            extensions = [
                ext_id
                for label, ext_id in EXTENSION_CHOICES.items()
                if typer.confirm(f"Add the {label} extension ({ext_id})?", default=False)
            ]

    if license_ is None:
        license_ = License(
            typer.prompt(
                "License",
                default=License.NONE.value,
                type=click.Choice([choice.value for choice in License]),
            ),
        )

    answers = {
        "project_name": name,
        "description": description,
        "license": license_,
        "include_devcontainer": bool(devcontainer),
        "ai_chat_continuity": bool(chat_continuity),
        "vscode_extensions": extensions or [],
    }
    if image is not None:
        answers["devcontainer_image"] = image
    return ProjectConfig(**answers)


def _confirm_target(target: Path, force: bool) -> bool:
    """Decide whether a non-empty target may be used.

    Returns:
        The allow_non_empty flag for the scaffolder
    """
    if not target.is_dir():
        return False
    entries = list(target.iterdir())
    if not entries:
        return False
    if force:
        return True
    console.print(
        f"[yellow]Warning:[/yellow] Directory {target} contains {len(entries)} items.",
    )
    console.print("Existing files will NOT be changed; only missing files will be added.")
    if not typer.confirm("Continue anyway?"):
        console.print("[yellow]Aborted.[/yellow]")
        raise typer.Exit(1)
    return True


def _init_git(target: Path, project_name: str) -> list[str]:
    """Run git init, add and an initial commit in *target*."""
    commands = [
        (["git", "init"], "git init"),
        (["git", "add", "."], "git add ."),
        (
            ["git", "commit", "-m", f"Initial scaffold for {project_name} (via seed)"],
            'git commit -m "Initial scaffold for <project> (via seed)"',
        ),
    ]
    executed: list[str] = []
    for args, label in commands:
        try:
            subprocess.run(args, cwd=target, check=True, capture_output=True)
        except (OSError, subprocess.CalledProcessError) as e:
            msg = f"{label} failed: {e}"
            raise SeedKitError(msg, details={"path": str(target)}) from e
        executed.append(label)
    return executed


@app.command()
def new(
    directory: Path = typer.Argument(..., help="Directory to create the project in"),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML answers file (skips prompts)",
    ),
    name: str | None = typer.Option(None, "--name", help="Project name"),
    description: str | None = typer.Option(None, "--description", help="Project description"),
    license_: License | None = typer.Option(None, "--license", help="License to include"),
    devcontainer: bool | None = typer.Option(
        None,
        "--devcontainer/--no-devcontainer",
        help="Include a dev container",
    ),
    image: str | None = typer.Option(None, "--image", help="Dev container image tag"),
    chat_continuity: bool | None = typer.Option(
        None,
        "--chat-continuity/--no-chat-continuity",
        help="Share AI tool state with the dev container",
    ),
    extension: list[str] | None = typer.Option(
        None,
        "--extension",
        "-e",
        help="VS Code extension id (can be repeated)",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Scaffold into a non-empty directory without asking",
    ),
    git: bool = typer.Option(False, "--git", help="Initialize a git repository"),
) -> None:
    """Scaffold a new project with docs, editor config and agent skills."""
    try:
        allow_non_empty = _confirm_target(directory, force)

        if config_file is not None:
            config = load_answers(config_file)
        else:
            config = _prompt_config(
                directory.resolve().name,
                name,
                description,
                license_,
                devcontainer,
                image,
                chat_continuity,
                extension or None,
            )

        before = snapshot_files(directory)
        existed = directory.exists()

        console.print("scaffolding...\n")
        report = Scaffolder().scaffold(directory, config, allow_non_empty=allow_non_empty)
        if not existed:
            console.print(f"Created directory: {directory}")

        skills_report = install_skills(directory)
        for path in created_files(before, snapshot_files(directory)):
            console.print(f"[green]✓[/green] created {escape(path)}")
        kept = report.skipped + [f"skills/{name}" for name in skills_report.skipped]
        for path in kept:
            console.print(f"[dim]• kept existing {escape(path)}[/dim]")

        if git:
            for action in _init_git(directory, config.project_name):
                console.print(f"[green]✓[/green] {action}")

        console.print("Done.")

    except (ValidationError, SeedKitError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


@app.command()
def skills(
    directory: Path = typer.Argument(
        Path("."),
        help="Existing project directory",
    ),
) -> None:
    """Install agent skill files into an existing project."""
    try:
        report = install_skills(directory)
    except SeedKitError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    for name in report.installed:
        console.print(f"[green]✓[/green] created skills/{name}")
    for name in report.skipped:
        console.print(f"[dim]• kept existing skills/{name}[/dim]")


@app.command()
def version() -> None:
    """Show Seed version information."""
    console.print(f"seed version {_get_version_string()}")


def main() -> None:
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()

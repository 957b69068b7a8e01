"""SeedKit: project scaffolding for agentic development."""

__version__ = "0.1.0"
__author__ = "SeedKit Contributors"
__description__ = "Project scaffolding for agentic development"

from .assets import AssetRegistry, default_registry
from .exceptions import SeedKitError
from .models import DEFAULT_AI_TOOLS, AIToolEntry, License, ProjectConfig, ScaffoldReport
from .scaffold import Scaffolder, build_devcontainer
from .skills import install_skills

__all__ = [
    "DEFAULT_AI_TOOLS",
    "AIToolEntry",
    "AssetRegistry",
    "License",
    "ProjectConfig",
    "Scaffolder",
    "ScaffoldReport",
    "SeedKitError",
    "build_devcontainer",
    "default_registry",
    "install_skills",
]

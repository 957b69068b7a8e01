"""Custom exceptions for SeedKit."""

from typing import Any


class SeedKitError(Exception):
    """Base exception for all SeedKit errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}


class PathError(SeedKitError):
    """Raised when a target path is missing, not a directory, or inaccessible."""


class StateError(SeedKitError):
    """Raised when a target directory is not empty and no override was given."""


class RenderError(SeedKitError):
    """Raised when a template cannot be resolved or executed."""


class SerializationError(SeedKitError):
    """Raised when a structured artifact cannot be encoded."""


class WriteError(SeedKitError):
    """Raised when a file or directory cannot be created or written."""


class ConfigError(SeedKitError):
    """Raised when a project answers file is invalid."""

"""Bundled templates and skill documents."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from importlib import resources
from types import MappingProxyType

from .exceptions import RenderError

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".tmpl"
DATA_DIR = "data"
TEMPLATES_DIR = "templates"
SKILLS_DIR = "skills"


class AssetRegistry:
    """Read-only, in-memory set of named templates and reference documents.

    Templates are text and are rendered; skill documents are bytes and are
    copied verbatim.
    """

    def __init__(
        self,
        templates: Mapping[str, str],
        documents: Mapping[str, bytes],
    ) -> None:
        self._templates = MappingProxyType(dict(templates))
        self._documents = MappingProxyType(dict(documents))

    @classmethod
    def from_package(cls, package: str = "seedkit") -> AssetRegistry:
        """Load every bundled asset of *package* into memory."""
        root = resources.files(package)
        templates = {
            entry.name: entry.read_text(encoding="utf-8")
            for entry in (root / DATA_DIR / TEMPLATES_DIR).iterdir()
            if entry.is_file() and entry.name.endswith(TEMPLATE_SUFFIX)
        }
        documents = {
            entry.name: entry.read_bytes()
            for entry in (root / DATA_DIR / SKILLS_DIR).iterdir()
            if entry.is_file() and entry.name.endswith(".md")
        }
        logger.debug(
            "Loaded %d templates and %d skill documents",
            len(templates),
            len(documents),
        )
        return cls(templates, documents)

    @property
    def templates(self) -> Mapping[str, str]:
        return self._templates

    @property
    def documents(self) -> Mapping[str, bytes]:
        return self._documents

    def template(self, name: str) -> str:
        """Return template source by name.

        Raises:
            RenderError: If no template of that name is bundled
        """
        try:
            return self._templates[name]
        except KeyError as e:
            msg = f"template {name} not found"
            raise RenderError(msg, details={"template": name}) from e

    def document_names(self) -> list[str]:
        return sorted(self._documents)


@lru_cache(maxsize=1)
def default_registry() -> AssetRegistry:
    """The registry of assets shipped with SeedKit, loaded once per process."""
    return AssetRegistry.from_package()

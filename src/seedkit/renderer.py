"""Jinja2 rendering of bundled templates into a target directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from .assets import TEMPLATE_SUFFIX, AssetRegistry, default_registry
from .exceptions import RenderError, WriteError

logger = logging.getLogger(__name__)


def output_name_for(template_name: str) -> str:
    """Strip the template suffix: ``README.md.tmpl`` -> ``README.md``."""
    if template_name.endswith(TEMPLATE_SUFFIX):
        return template_name[: -len(TEMPLATE_SUFFIX)]
    return template_name


class TemplateRenderer:
    """Renders registry templates with project data.

    Undefined variables are errors, so a template can only use the fields
    the caller passes in.
    """

    def __init__(self, registry: AssetRegistry | None = None) -> None:
        self.registry = registry or default_registry()
        self.env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._compiled: dict[str, Template] = {}

    def get_template(self, template_name: str) -> Template:
        """Compile a registry template, once per renderer.

        Raises:
            RenderError: Unknown template or a syntax error in its source
        """
        if template_name not in self._compiled:
            source = self.registry.template(template_name)
            try:
                self._compiled[template_name] = self.env.from_string(source)
            except TemplateError as e:
                msg = f"failed to parse {template_name}: {e}"
                raise RenderError(msg, details={"template": template_name}) from e
        return self._compiled[template_name]

    @staticmethod
    def output_path(
        dest_dir: Path,
        template_name: str,
        output_name: str | None = None,
    ) -> Path:
        """Where :meth:`render` writes *template_name* inside *dest_dir*."""
        return Path(dest_dir) / (output_name or output_name_for(template_name))

    def render(
        self,
        dest_dir: Path,
        template_name: str,
        data: dict[str, Any],
        output_name: str | None = None,
    ) -> Path:
        """Render *template_name* into *dest_dir*.

        The output file is created (or truncated) before rendering starts. A
        failed render leaves whatever was written so far in place.

        Args:
            dest_dir: Directory receiving the file
            template_name: Registry template name, e.g. ``README.md.tmpl``
            data: Template variables
            output_name: Override for the output file name

        Returns:
            Path of the written file

        Raises:
            RenderError: Unknown template or template execution failure
            WriteError: The output file could not be written
        """
        template = self.get_template(template_name)

        output_path = self.output_path(dest_dir, template_name, output_name)
        details = {"template": template_name, "path": str(output_path)}
        try:
            with output_path.open("w", encoding="utf-8", newline="\n") as f:
                for chunk in template.generate(**data):
                    f.write(chunk)
        except TemplateError as e:
            msg = f"failed to render {template_name}: {e}"
            raise RenderError(msg, details=details) from e
        except OSError as e:
            msg = f"failed to create {output_path}: {e}"
            raise WriteError(msg, details=details) from e

        logger.debug("Rendered %s -> %s", template_name, output_path)
        return output_path

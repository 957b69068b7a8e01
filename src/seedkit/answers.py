"""Loads project answers from a YAML file for non-interactive runs."""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import ProjectConfig

SCHEMA_NAME = "answers"


@lru_cache(maxsize=1)
def load_schema() -> dict[str, Any]:
    """Load the bundled answers JSON schema."""
    schema_file = resources.files("seedkit") / "data" / "schemas" / f"{SCHEMA_NAME}.schema.json"
    return json.loads(schema_file.read_text(encoding="utf-8"))


def parse_answers(data: Any, source: str = "<answers>") -> ProjectConfig:
    """Validate raw answers data and build a ProjectConfig.

    Raises:
        ConfigError: If the data fails schema or model validation
    """
    if data is None:
        data = {}
    try:
        jsonschema.validate(data, load_schema())
    except jsonschema.ValidationError as e:
        msg = f"Answers validation failed: {e.message}"
        raise ConfigError(
            msg,
            details={"path": list(e.absolute_path), "source": source},
        ) from e

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Answers validation failed: {e}"
        raise ConfigError(msg, details={"source": source}) from e


def load_answers(path: Path) -> ProjectConfig:
    """Load a YAML answers file.

    Args:
        path: YAML file with ProjectConfig keys

    Returns:
        Validated project configuration

    Raises:
        ConfigError: If the file cannot be read, parsed, or validated
    """
    path = Path(path)
    if not path.exists():
        msg = f"Answers file not found: {path}"
        raise ConfigError(msg, details={"source": str(path)})

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Failed to parse answers YAML: {e}"
        raise ConfigError(msg, details={"source": str(path)}) from e
    except OSError as e:
        msg = f"Failed to read answers file: {e}"
        raise ConfigError(msg, details={"source": str(path)}) from e

    return parse_answers(data, source=str(path))

"""Document loading utilities."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .errors import DocumentNotFoundError, SchemaError

YAML_SUFFIXES: frozenset[str] = frozenset({".yml", ".yaml"})


def load_schema(schema_path: Path) -> dict[str, Any]:
    """Load a JSON or YAML document from disk.

    The format is chosen by file suffix: ``.yml``/``.yaml`` are read with
    PyYAML, anything else is treated as JSON.

    Args:
        schema_path: Path to the document.

    Returns:
        The parsed document mapping.

    Raises:
        DocumentNotFoundError: If the file does not exist.
        SchemaError: If the file cannot be read or parsed.
    """
    if not schema_path.is_file():
        raise DocumentNotFoundError(str(schema_path))

    try:
        content = schema_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaError(f"Failed to read document: {e}", str(schema_path)) from e

    if schema_path.suffix.lower() in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SchemaError(f"Invalid YAML: {e}", str(schema_path)) from e
    else:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise SchemaError(f"Invalid JSON: {e}", str(schema_path)) from e

    if not isinstance(data, dict):
        raise SchemaError("Document root must be a mapping", str(schema_path))

    return data

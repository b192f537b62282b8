"""Schema validation for configuration payloads.

Schemas are JSON Schema documents written in YAML and stored under
``templet.data/schemas/``.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
from jsonschema import Draft202012Validator

from templet.core.exceptions import ConfigurationError
from templet.core.utils.io import read_yaml
from templet.data import get_data_path


def load_schema(schema_name: str, *, schemas_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Load a schema dict from the schemas directory.

    Automatically appends ``.yaml`` if no extension is present.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"

    root = Path(schemas_dir) if schemas_dir is not None else get_data_path("schemas")
    schema_path = root / schema_name
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    schema = read_yaml(schema_path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def _format_error(error: jsonschema.ValidationError) -> str:
    location = ".".join(str(p) for p in error.absolute_path) or "<root>"
    return f"{location}: {error.message}"


def collect_errors(
    payload: Dict[str, Any],
    schema_name: str,
    *,
    schemas_dir: Optional[Path] = None,
) -> List[str]:
    """Return every validation error message (empty list if valid)."""
    schema = load_schema(schema_name, schemas_dir=schemas_dir)
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(payload), key=lambda e: list(e.absolute_path))
    return [_format_error(e) for e in errors]


def validate_payload(
    payload: Dict[str, Any],
    schema_name: str,
    *,
    schemas_dir: Optional[Path] = None,
) -> None:
    """Validate a payload against a schema.

    Raises:
        ConfigurationError: If validation fails (all errors in the message).
    """
    errors = collect_errors(payload, schema_name, schemas_dir=schemas_dir)
    if errors:
        raise ConfigurationError(
            f"Validation failed against schema '{schema_name}': " + "; ".join(errors),
            context={"schema": schema_name, "errors": errors},
        )


__all__ = ["load_schema", "collect_errors", "validate_payload"]

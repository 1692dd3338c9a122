"""Schema validation for package API payloads.

Responses from the remote package API are validated with JSON Schema before
they are turned into ``PackageInfo`` objects. Schemas are stored as YAML
files under ``lazybones.data/schemas/`` and loaded in a single, consistent
way.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from lazybones.data import get_data_path
from lazybones.core.utils.io import read_yaml


class SchemaValidationError(ValueError):
    """Raised when schema validation fails."""

    pass


def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema.

    Automatically appends ``.yaml`` if no extension is present.

    Args:
        schema_name: Schema file name under the schemas root
            (e.g., "package-info.schema.yaml" or "package-info.schema").

    Returns:
        Parsed schema dictionary.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"
    return _load_schema_cached(schema_name)


@lru_cache(maxsize=8)
def _load_schema_cached(schema_name: str) -> Dict[str, Any]:
    schema_path = get_data_path("schemas", schema_name)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_name}")

    schema = read_yaml(schema_path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    Draft202012Validator.check_schema(schema)
    return schema


def _format_error(error: Any) -> str:
    location = "/".join(str(p) for p in error.path)
    return f"{location}: {error.message}" if location else error.message


def validate_payload(payload: Any, schema_name: str) -> None:
    """Validate a payload against a bundled JSON schema.

    Raises:
        SchemaValidationError: If validation fails. The message lists every
            violation.
        FileNotFoundError: If the schema doesn't exist.
    """
    errors = validate_payload_safe(payload, schema_name)
    if errors:
        raise SchemaValidationError(
            f"Validation failed against schema '{schema_name}': " + "; ".join(errors)
        )


def validate_payload_safe(payload: Any, schema_name: str) -> List[str]:
    """Validate a payload and return error messages (empty if valid)."""
    schema = load_schema(schema_name)
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path])
    return [_format_error(e) for e in errors]


__all__ = [
    "SchemaValidationError",
    "load_schema",
    "validate_payload",
    "validate_payload_safe",
]

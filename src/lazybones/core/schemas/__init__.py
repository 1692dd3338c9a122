"""JSON Schema validation of remote API payloads."""
from __future__ import annotations

from .validation import SchemaValidationError, load_schema, validate_payload, validate_payload_safe

__all__ = [
    "SchemaValidationError",
    "load_schema",
    "validate_payload",
    "validate_payload_safe",
]

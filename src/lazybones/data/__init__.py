"""
Lazybones data resource helpers.

Provides access to the bundled default configuration and the JSON schemas
used to validate remote API payloads, via importlib.resources.
"""

from __future__ import annotations

import copy
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Args:
        subpackage: Name of the data subpackage (e.g., "config", "schemas")
        filename: Optional filename within the subpackage

    Returns:
        Absolute path to the file or directory

    Example:
        >>> get_data_path("config", "defaults.yaml")
        PosixPath('/path/to/lazybones/data/config/defaults.yaml')
    """
    pkg = resources.files("lazybones.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=16)
def _read_yaml_cached(subpackage: str, filename: str) -> Any:
    path = get_data_path(subpackage, filename)
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def read_yaml(subpackage: str, filename: str) -> Any:
    """
    Read and parse a bundled YAML data file.

    Parsing is cached; callers always receive a private deep copy so the
    cached document can never be mutated.

    Args:
        subpackage: Name of the data subpackage
        filename: YAML filename

    Returns:
        Parsed YAML content
    """
    return copy.deepcopy(_read_yaml_cached(subpackage, filename))


def load_default_config() -> dict[str, Any]:
    """Return the built-in default settings as a nested mapping."""
    return read_yaml("config", "defaults.yaml") or {}


__all__ = [
    "get_data_path",
    "read_yaml",
    "load_default_config",
]

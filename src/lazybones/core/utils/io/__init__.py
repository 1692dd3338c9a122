"""I/O utilities for Lazybones.

This package provides safe file operations:
- Core: atomic writes
- JSON: read/write of the managed configuration file
- YAML: read of the user configuration file
"""
from __future__ import annotations

from .core import (
    PathLike,
    atomic_write,
    ensure_parent_dir,
)
from .json import (
    read_json,
    write_json_atomic,
)
from .yaml import (
    read_yaml,
)

__all__ = [
    # core
    "PathLike",
    "ensure_parent_dir",
    "atomic_write",
    # json
    "read_json",
    "write_json_atomic",
    # yaml
    "read_yaml",
]

"""Layered, schema-validated configuration.

Public entry points:

- ``init_configuration()``: load defaults, managed settings, the user config
  file and environment overrides into a ``Configuration``
- ``Configuration``: read and change settings, persist the managed layer
- ``SettingSchema`` / ``DEFAULT_SCHEMA``: the recognised settings
"""
from __future__ import annotations

from lazybones.core.exceptions import ConfigFileError

from .converters import (
    DEFAULT_CONVERTERS,
    Converter,
    ConverterRegistry,
    ListConverter,
    default_converters,
    is_url,
)
from .layers import ConfigLayers
from .loader import init_configuration
from .manager import Configuration, format_setting_value
from .schema import DEFAULT_SCHEMA, SettingSchema
from .types import ListType, ScalarType, SettingPattern, list_of

__all__ = [
    "Configuration",
    "ConfigLayers",
    "ConfigFileError",
    "init_configuration",
    "format_setting_value",
    "SettingSchema",
    "DEFAULT_SCHEMA",
    "SettingPattern",
    "ScalarType",
    "ListType",
    "list_of",
    "Converter",
    "ConverterRegistry",
    "ListConverter",
    "DEFAULT_CONVERTERS",
    "default_converters",
    "is_url",
]

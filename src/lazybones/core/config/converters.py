"""Typed converters between setting values and their textual form.

Each setting type in the schema has a converter that can parse a value typed
on the command line, format a stored value for display, and check whether an
arbitrary value read from a file fits the type.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import urlparse

from lazybones.core.exceptions import NoConverterFoundError

from .types import ListType, ScalarType, SettingType

LIST_SEPARATOR = re.compile(r",\s+")


class Converter(ABC):
    """Converts values of one setting type to and from text."""

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Convert ``text`` to a typed value.

        Raises:
            ValueError: If ``text`` is not a valid representation.
        """

    def format(self, value: Any) -> str:
        return "" if value is None else str(value)

    @abstractmethod
    def validate(self, value: Any) -> bool:
        """Return True if ``value`` is acceptable for this type. Never raises."""


class StringConverter(Converter):
    def parse(self, text: str) -> str:
        return text

    def validate(self, value: Any) -> bool:
        return isinstance(value, str)


class BooleanConverter(Converter):
    """Only ``"true"`` (any case) parses as True; every other string is False."""

    def parse(self, text: str) -> bool:
        return text.strip().lower() == "true"

    def format(self, value: Any) -> str:
        return "true" if value else "false"

    def validate(self, value: Any) -> bool:
        return isinstance(value, bool)


class IntegerConverter(Converter):
    def parse(self, text: str) -> int:
        return int(text.strip())

    def validate(self, value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)


class UrlConverter(Converter):
    """Absolute URIs only: a scheme is required."""

    def parse(self, text: str) -> str:
        candidate = text.strip()
        if not _is_absolute_uri(candidate):
            raise ValueError(f"Not an absolute URL: {text!r}")
        return candidate

    def validate(self, value: Any) -> bool:
        return isinstance(value, str) and _is_absolute_uri(value)


class ObjectConverter(Converter):
    def parse(self, text: str) -> Any:
        return text

    def validate(self, value: Any) -> bool:
        return value is not None


class ListConverter(Converter):
    """Comma separated lists of a component type.

    Elements are separated by a comma followed by at least one whitespace
    character, so ``"a, b"`` is two elements while ``"a,b"`` is one.
    """

    def __init__(self, component: Converter) -> None:
        self.component = component

    def parse(self, text: str) -> List[Any]:
        return [self.component.parse(part) for part in LIST_SEPARATOR.split(text)]

    def format(self, value: Any) -> str:
        if value is None:
            return ""
        return ", ".join(self.component.format(v) for v in value)

    def validate(self, value: Any) -> bool:
        if not isinstance(value, (list, tuple)):
            return False
        return all(self.component.validate(v) for v in value)


class ConverterRegistry:
    """Maps setting types to their converters.

    Scalar types are looked up directly; list types are recognised
    structurally and wrap the converter of their component type.
    """

    def __init__(self, converters: Mapping[ScalarType, Converter]) -> None:
        self._converters: Dict[ScalarType, Converter] = dict(converters)

    def converter_for(self, setting_type: SettingType) -> Converter:
        if isinstance(setting_type, ListType):
            return ListConverter(self.converter_for(setting_type.component))
        converter = self._converters.get(setting_type)
        if converter is None:
            raise NoConverterFoundError(setting_type)
        return converter


def _is_absolute_uri(text: str) -> bool:
    if not text or any(c.isspace() for c in text):
        return False
    try:
        parsed = urlparse(text)
    except ValueError:
        return False
    # Single letters are Windows drive prefixes rather than schemes.
    return len(parsed.scheme) > 1 and bool(parsed.netloc or parsed.path)


def default_converters() -> ConverterRegistry:
    """Return a registry holding a converter for every scalar type."""
    return ConverterRegistry(
        {
            ScalarType.STRING: StringConverter(),
            ScalarType.BOOLEAN: BooleanConverter(),
            ScalarType.INTEGER: IntegerConverter(),
            ScalarType.URL: UrlConverter(),
            ScalarType.OBJECT: ObjectConverter(),
        }
    )


DEFAULT_CONVERTERS = default_converters()


def is_url(text: Optional[Union[str, Any]]) -> bool:
    """Return True if ``text`` is a string holding an absolute URI."""
    return isinstance(text, str) and _is_absolute_uri(text)


__all__ = [
    "Converter",
    "StringConverter",
    "BooleanConverter",
    "IntegerConverter",
    "UrlConverter",
    "ObjectConverter",
    "ListConverter",
    "ConverterRegistry",
    "DEFAULT_CONVERTERS",
    "default_converters",
    "is_url",
]

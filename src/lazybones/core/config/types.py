"""Setting type tags and name patterns used by the setting schema."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

WILDCARD = "*"
DEEP_WILDCARD = "**"


class ScalarType(str, Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    URL = "url"
    OBJECT = "object"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ListType:
    """A list whose elements all have the ``component`` type."""

    component: ScalarType

    def __str__(self) -> str:
        return f"list<{self.component}>"


SettingType = Union[ScalarType, ListType]


def list_of(component: ScalarType) -> ListType:
    return ListType(component)


@dataclass(frozen=True, slots=True)
class SettingPattern:
    """A schema key: an exact dotted name, ``<prefix>.*`` or ``<prefix>.**``.

    ``templates.mappings.*`` matches ``templates.mappings.my-template`` (any
    non-empty final segment) but not ``templates.mappings.foo.bar``.
    ``systemProp.**`` matches one or more segments below ``systemProp``, so
    ``systemProp.http.proxyHost`` is a valid name.
    """

    name: str
    prefix: Optional[str] = None
    deep: bool = False

    @classmethod
    def parse(cls, name: str) -> "SettingPattern":
        if name.endswith("." + DEEP_WILDCARD):
            return cls(name=name, prefix=name[: -len(DEEP_WILDCARD) - 1], deep=True)
        if name.endswith("." + WILDCARD):
            return cls(name=name, prefix=name[: -len(WILDCARD) - 1])
        return cls(name=name)

    @property
    def is_wildcard(self) -> bool:
        return self.prefix is not None

    def matches(self, setting_name: str) -> bool:
        if self.prefix is None:
            return setting_name == self.name
        if self.deep:
            rest = setting_name[len(self.prefix) + 1:]
            return (
                setting_name.startswith(self.prefix + ".")
                and all(rest.split("."))
            )
        parent, sep, leaf = setting_name.rpartition(".")
        return bool(sep) and parent == self.prefix and bool(leaf)

    def __str__(self) -> str:
        return self.name


__all__ = [
    "WILDCARD",
    "DEEP_WILDCARD",
    "ScalarType",
    "ListType",
    "SettingType",
    "SettingPattern",
    "list_of",
]

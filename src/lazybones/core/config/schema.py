"""The registry of recognised settings and their types.

A ``SettingSchema`` is immutable and built explicitly; ``DEFAULT_SCHEMA``
describes every setting the application understands.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union

from lazybones.core.exceptions import UnknownSettingError

from .converters import DEFAULT_CONVERTERS, Converter, ConverterRegistry
from .types import ScalarType, SettingPattern, SettingType, list_of


class SettingSchema:
    """Immutable mapping of setting patterns to setting types.

    Args:
        entries: Mapping of pattern names (``cache.dir``, ``templates.mappings.*``)
            to setting types.
        converters: Registry used to convert values for each type.
    """

    def __init__(
        self,
        entries: Mapping[Union[str, SettingPattern], SettingType],
        converters: ConverterRegistry = DEFAULT_CONVERTERS,
    ) -> None:
        parsed: Dict[SettingPattern, SettingType] = {}
        for key, setting_type in entries.items():
            pattern = key if isinstance(key, SettingPattern) else SettingPattern.parse(key)
            # Fail fast on types nobody can convert.
            converters.converter_for(setting_type)
            parsed[pattern] = setting_type
        self._entries = MappingProxyType(parsed)
        self._exact = {p.name: t for p, t in parsed.items() if not p.is_wildcard}
        self._wildcards = tuple((p, t) for p, t in parsed.items() if p.is_wildcard)
        self.converters = converters

    def setting_type(self, name: str) -> Optional[SettingType]:
        """Return the type registered for ``name``.

        Exact entries take precedence over wildcards. Returns None for
        unknown names.
        """
        if name in self._exact:
            return self._exact[name]
        for pattern, setting_type in self._wildcards:
            if pattern.matches(name):
                return setting_type
        return None

    def is_known(self, name: str) -> bool:
        return self.setting_type(name) is not None

    def is_complete(self, name: str) -> bool:
        """Return True if ``name`` is itself an exact schema entry."""
        return name in self._exact

    def matches_prefix(self, partial: str) -> bool:
        """Return True if some setting lives below ``partial``."""
        prefix = partial + "."
        for pattern in self._entries:
            if pattern.name.startswith(prefix):
                return True
            if pattern.is_wildcard and pattern.matches(partial):
                return True
        return False

    def converter_for(self, name: str) -> Converter:
        setting_type = self.setting_type(name)
        if setting_type is None:
            raise UnknownSettingError(name)
        return self.converters.converter_for(setting_type)

    def validate_value(self, name: str, value: Any) -> bool:
        """Return True if ``value`` fits the type registered for ``name``."""
        setting_type = self.setting_type(name)
        if setting_type is None:
            return False
        return self.converters.converter_for(setting_type).validate(value)

    def items(self) -> Iterator[Tuple[SettingPattern, SettingType]]:
        return iter(self._entries.items())

    def names(self) -> Tuple[str, ...]:
        return tuple(sorted(p.name for p in self._entries))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.is_known(name)

    def __len__(self) -> int:
        return len(self._entries)


DEFAULT_SCHEMA = SettingSchema(
    {
        "config.file": ScalarType.STRING,
        "cache.dir": ScalarType.STRING,
        "git.name": ScalarType.STRING,
        "git.email": ScalarType.STRING,
        "options.logLevel": ScalarType.STRING,
        "options.verbose": ScalarType.BOOLEAN,
        "options.quiet": ScalarType.BOOLEAN,
        "options.info": ScalarType.BOOLEAN,
        "options.stacktrace": ScalarType.BOOLEAN,
        "templateRepositories": list_of(ScalarType.STRING),
        "repositories.apiUrl": ScalarType.URL,
        "repositories.templateUrl": ScalarType.URL,
        "templates.mappings.*": ScalarType.URL,
        "systemProp.**": ScalarType.OBJECT,
    }
)


__all__ = [
    "SettingSchema",
    "DEFAULT_SCHEMA",
]

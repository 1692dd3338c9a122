"""Immutable configuration layer snapshots.

Settings come from four layers, lowest precedence first:

- ``base``: built-in defaults
- ``managed``: values persisted by the tool (``managed-config.json``)
- ``override``: the user config file plus environment overrides
- ``runtime``: values changed during this invocation

The runtime layer mirrors every in-process write so a value set through
``Configuration.put_setting`` is visible immediately, even when the override
layer will shadow it on the next run.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping

from lazybones.core.utils.merge import (
    find_shared_keys,
    merge_layers,
    remove_path,
    set_path,
)


def _empty() -> Dict[str, Any]:
    return {}


@dataclass(frozen=True)
class ConfigLayers:
    base: Mapping[str, Any] = field(default_factory=_empty)
    managed: Mapping[str, Any] = field(default_factory=_empty)
    override: Mapping[str, Any] = field(default_factory=_empty)
    runtime: Mapping[str, Any] = field(default_factory=_empty)

    def effective(self) -> Dict[str, Any]:
        """Return the merged view of every layer."""
        return merge_layers(self.base, self.managed, self.override, self.runtime)

    def with_value(self, name: str, value: Any) -> "ConfigLayers":
        """Return new layers with ``value`` stored at ``name`` in the managed layer."""
        return replace(
            self,
            managed=set_path(self.managed, name, value),
            runtime=set_path(self.runtime, name, value),
        )

    def without_value(self, name: str) -> "ConfigLayers":
        """Return new layers with ``name`` removed from the managed layer."""
        return replace(
            self,
            managed=remove_path(self.managed, name),
            runtime=remove_path(self.runtime, name),
        )

    def shadowed_keys(self) -> List[str]:
        """Return dotted keys present in both the managed and override layers."""
        return find_shared_keys(self.managed, self.override)


__all__ = ["ConfigLayers"]
